# xfcat

A command-line tool and small library for `.cat`/`.dat` package pairs. The
`.cat` file is a plain-text catalogue with one line per entry:

```
<path> <size> <unix timestamp> <md5 hex digest>
```

and the `.dat` file holds the contents of all entries, concatenated in
catalogue order. Paths may contain spaces; the last three fields of each
line are split off from the right.

## Installation

```
pip install .
```

This installs the `xfcat` command. Progress bars are drawn with `tqdm`.

## Usage

Package paths may be given with a `.cat` or `.dat` extension, or with no
extension at all; in every case the catalogue `<name>.cat` is read.

```
xfcat --version
xfcat COMMAND --help
```

### List package contents

```
xfcat list 01.cat 02.cat
xfcat list -H --size 01
xfcat list --filter 'md/**/*.xml' --name --reverse 01.dat
```

For each package, prints its path, one line per entry (size, UTC time as
`Mon DD YYYY HH:MM`, path) and a total count. A package that cannot be read
is reported on standard error and skipped; the others are still listed.

Options:

- `-H`, `--human-readable`: show sizes as B/K/M/G (binary units, one decimal)
- `-n`, `--name`: sort alphabetically by path (case-sensitive)
- `-S`, `--size`: sort by size, largest first
- `-t`, `--time`: sort by time, newest first
- `-r`, `--reverse`: reverse the resulting order
- `-f`, `--filter PATTERN`: only show paths matching a glob pattern

Only one of `--name`, `--size` and `--time` may be given. Without any of
them, entries keep catalogue order.

### Extract packages

```
xfcat unpack 01.cat 02.cat 03.cat --out ./out
xfcat unpack *.cat --use-subdirs --threads 4
```

When several packages hold the same path, only the entry from the package
given last is extracted (and, within one package, its last occurrence).
Entries of size zero are not extracted. Each extracted file gets the
entry's timestamp as its access and modification time.

Extracted data is checked against the catalogue hash unless `--no-verify`
is given; a mismatch is reported as a warning and the file is kept. A
package whose extraction fails shows the error in its progress line, and
the remaining packages are still extracted.

Options:

- `-o`, `--out DIR`: output directory (default `./out`)
- `-t`, `--threads COUNT`: number of worker threads
- `-n`, `--no-verify`: skip hash verification
- `-u`, `--use-subdirs`: extract each package into a subdirectory of the
  output directory, named after the directory that holds the package
- `-f`, `--filter PATTERN`: only extract paths matching a glob pattern

### Pack a directory

```
xfcat pack ./my_mod --name ext_01 --out ./dist
```

This writes `ext_01.cat` and `ext_01.dat`, creating the output directory if
needed. The name defaults to the source directory's name, and the output
directory to the current directory. Every file below the source directory
is packed with its path relative to it; symbolic links to files are
followed, symbolic links to directories are skipped.

Options:

- `-n`, `--name NAME`: output name
- `-o`, `--out DIR`: output directory
- `-f`, `--filter PATTERN`: only pack relative paths matching a glob pattern

### Glob patterns

| Pattern  | Matches                                             |
|----------|-----------------------------------------------------|
| `?`      | any single character                                |
| `*`      | zero or more characters, except path separators     |
| `**`     | zero or more characters, including path separators  |
| `[...]`  | any character in the brackets; `!`/`^` negates      |
| `[a-b]`  | any character in the range; `!`/`^` negates         |
| `{a,b}`  | either pattern `a` or `b`; may be nested            |
| `!`      | leading `!` negates the whole match                 |

### Exit status

The command exits with 0 on success and 1 when a command fails (the error
is printed on standard error). A closed output pipe, as with `xfcat list
... | head`, is not treated as an error.

## Library use

The catalogue format can be read and written directly:

```python
from xfcat.cat import Reader, Writer

with open("01.cat", "rb") as stream:
    for entry in Reader(stream):
        print(entry.path, entry.size, entry.timestamp, entry.hash)
```

Malformed lines raise `xfcat.cat.ParseError`, which carries the line
number. `Entry.reader(dat_stream)` returns a reader limited to the entry's
bytes in an open `.dat` file, and `xfcat.cat.resolve_catalog` maps a
package path to its `.cat` file.

Other modules:

- `xfcat.md5`: `Context` computes MD5 digests incrementally (it can also be
  written to like a stream); `Digest.parse` reads a 32-character hex digest.
- `xfcat.filters`: `glob_match(pattern, path)` and `PathFilter`.
- `xfcat.walk`: `walk(root)` yields `FsEntry` items for the files below a
  directory.
- `xfcat.listing`, `xfcat.unpacking`, `xfcat.packing`: the functions behind
  the three commands, each with a `run` function.
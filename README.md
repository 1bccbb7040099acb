# dsshell

This package provides two command-line tools and the data structures that they use:

* **`dsshell-testlib`** reads commands one line at a time and applies them to
  linked lists, hash tables and bitmaps.
* **`dsshell`** is an interactive shell for POSIX systems. It has the built-ins
  `cd`, `exit`, `jobs`, `fg`, `bg` and `kill`. It runs pipelines joined with
  `|`, accepts single- and double-quoted arguments, and starts a job in the
  background when the line ends with `&`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The data-structure interpreter

```
dsshell-testlib commands.txt
dsshell-testlib < commands.txt
```

The interpreter reads commands from the named file. If no file is named, it
reads them from standard input. It stops at end of input or when it reads
`quit`.

Each structure is addressed by the last character of its name, which is a digit
from 0 to 9. For example, `list0`, `hash3` and `bm7` are structures in slots 0,
3 and 7. Because only the last digit counts, `list10` refers to the same slot as
`list0`.

Here is a sample session:

```
create list list0
list_push_back list0 3
list_push_back list0 1
list_sort list0
dumpdata list0
create hashtable hash0
hash_insert hash0 5
hash_apply hash0 square
dumpdata hash0
create bitmap bm0 16
bitmap_mark bm0 3
bitmap_scan_and_flip bm0 0 2 false
dumpdata bm0
quit
```

Commands for lists:

* `list_insert`, `list_insert_ordered`, `list_push_front`, `list_push_back`
* `list_pop_front`, `list_pop_back`, `list_remove`
* `list_front`, `list_back`, `list_empty`, `list_size`, `list_max`, `list_min`
* `list_reverse`, `list_sort`, `list_unique`, `list_swap`, `list_splice`, `list_shuffle`

Commands for hash tables:

* `hash_insert`, `hash_delete`, `hash_replace`, `hash_find`
* `hash_apply` with `square` or `triple`
* `hash_empty`, `hash_size`, `hash_clear`

Commands for bitmaps:

* `bitmap_mark`, `bitmap_set`, `bitmap_set_multiple`, `bitmap_set_all`, `bitmap_reset`, `bitmap_flip`
* `bitmap_scan`, `bitmap_scan_and_flip`, `bitmap_expand`
* `bitmap_all`, `bitmap_any`, `bitmap_none`, `bitmap_contains`, `bitmap_test`, `bitmap_count`
* `bitmap_size`, `bitmap_dump`

`bitmap_dump` prints a hex dump of the first half of the bitmap's storage bytes.

The interpreter prints an error and exits with status 1 in these cases:

* it reads a command it does not know;
* a command names a structure that has not been created;
* a command uses an index or range that is out of bounds.

## The shell

```
dsshell
```

The shell shows the prompt `CSE4100-SP-P2> `. It stops at end of input or when
it reads `exit`. Here are some sample command lines:

```
ls -al | grep py | wc -l
sleep 30 &
jobs
fg 1
bg 1
kill %1
```

When you start a job in the background, the shell prints `[job] [pgid]`. The
`jobs` command lists every job with its state, which is `Running`, `Stopped` or
`Terminated`, followed by its command line.

When standard input is a terminal, the shell hands the terminal to the
foreground job. In that case Ctrl-Z stops the foreground job, and the shell
records it as a stopped job. You can then resume it with `bg` or `fg`.

### What the shell does not do

The shell does not support any of the following:

* input or output redirection (`<`, `>`)
* wildcard expansion
* shell variables
* command history
* scripting constructs

Only the six built-ins listed above exist. Any other name is run as a program
found on `PATH`. A pipeline can hold at most ten commands.

## Library use

You can use the data structures directly from Python:

```python
from dsshell.bitmap import Bitmap
from dsshell.linkedlist import LinkedList
from dsshell.hashtable import HashTable, hash_int
from dsshell.hexdump import hex_dump

bits = Bitmap(8)
bits.mark(2)
assert bits.scan(0, 1, True) == 2

items = LinkedList([3, 1, 2])
items.sort(None)
assert list(items) == [1, 2, 3]

table = HashTable(hash_int)
table.insert(4)
assert table.find(4) == 4

print(hex_dump(0, b"hello", True), end="")
```

Other modules you can use directly:

* `dsshell.cmdparse` parses shell command lines into `Command` and `Pipeline`
  objects.
* `dsshell.jobs` provides the `JobTable` that the shell keeps.
* `dsshell.testlib.Interpreter` runs interpreter commands and writes the output
  to any text stream.
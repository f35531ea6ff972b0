# minitools

Three small command-line tools in one package:

- **minitools-git**: a minimal content-addressed version store that keeps
  its objects in a `.git` directory in the current working directory.
- **minitools-shell**: an interactive shell with built-in commands,
  history, tab completion, pipes and redirection.
- **minitools-laundry**: a simulation of students queueing for a limited
  number of washing machines.

The shell and its `ls` and `pinfo` commands need a POSIX system; `pinfo`
reads `/proc` and so works on Linux only.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## minitools-git

Run every command from the directory that holds (or will hold) the
repository.

```
minitools-git init                       # create .git with objects, refs and logs
minitools-git hash-object <file>         # print the SHA-1 of a file as a blob
minitools-git hash-object -w <file>      # ... and store it as a compressed object
minitools-git cat-file -p <sha>          # print an object's content
minitools-git cat-file -s <sha>          # print the size of the stored object, header included
minitools-git cat-file -t <sha>          # print an object's type
minitools-git write-tree                 # store the working directory as a tree
minitools-git ls-tree <sha>              # list a tree: mode, type and name
minitools-git ls-tree --name-only <sha>  # list a tree's names only
minitools-git add <path> ...             # stage files or directories (. for all)
minitools-git commit -m "message"        # commit the staged files
minitools-git log                        # show commits, newest first
minitools-git checkout <sha>             # write a commit's files into the working tree
```

Objects are stored zlib-compressed under `.git/objects/<xx>/<rest-of-sha>`.
`write-tree` and `add` skip `.git` and anything named `mygit`. `commit`
without `-m` uses the message `commit with no mssg`. A commit records a
line in `.git/logs/refs/heads/master`, points `.git/HEAD` and
`.git/refs/heads/main` at the new commit, and removes the index.

The same operations are available from Python:

```python
from minitools.git.cli import init_repository
from minitools.git.objects import sha1_hex, hash_object, cat_file, ls_tree, write_tree
from minitools.git.index import collect_files, write_index, read_index
from minitools.git.commits import commit, parse_log, format_log, checkout
```

## minitools-shell

```
minitools-shell
```

Starts an interactive prompt of the form `<user@system:~path>`. Commands
may be separated with `;`.

Built-in commands:

- `cd [path | - | ~ | . | ..]`: change directory; with no argument or `~`,
  go to the directory the shell was started in; `-` goes to the previous one.
- `pwd`: print the current directory relative to the start directory
  (`/<user>` when in the start directory itself).
- `echo <text>`: print text, keeping quoted parts as written and collapsing
  runs of unquoted spaces.
- `ls [-l] [-a] [-la] [dir]`: list a directory, optionally in long form.
- `search <name>`: print `True` if a file or directory of that name exists
  below the current directory, otherwise `False`.
- `history [n]`: print the last *n* commands (10 by default).
- `pinfo [pid]`: print status, virtual memory and executable path of a
  process (the shell itself by default).
- `exit`: save the history and leave.

Anything else is run as an external program; a trailing `&` runs it in the
background with its output discarded. Lines containing `|` run as a
pipeline, and lines containing `<`, `>` or `>>` have their input or output
redirected.

Keys: Up and Down walk through history, Tab completes command names and
file names, Ctrl-D saves history and logs out. Ctrl-C and Ctrl-Z are passed
on to the program running in the foreground. History is kept in
`history.txt` in the start directory, up to 20 entries. When standard input
is not a terminal, commands are read line by line.

## minitools-laundry

```
minitools-laundry < input.txt
minitools-laundry --instant < input.txt
```

The input is the number of students *n* and of machines *m*, followed by
*n* lines `T W P`: arrival time, washing time and patience, all in seconds.
Students are numbered from 1 in input order. Each student arrives at time
`T`, waits up to `P` seconds for a free machine, and washes for `W`
seconds. Events are printed in real time, or all at once with `--instant`:

```
Student 1 arrives
Student 1 starts washing
Student 1 leaves after washing
Student 2 leaves without washing
```

The run ends with the number of students who left without washing, then
`Yes` if that is at least 25% of all students (more machines are needed)
or `No` otherwise.

From Python:

```python
from minitools.laundry import parse_input, arrange, simulate

students, machines = parse_input("2 1\n0 3 1\n1 2 1\n")
print(simulate(students, machines).report())
```

## What it does not do

- The version store has a single branch and no branching, merging,
  diffing, status or remote commands. `checkout` writes a commit's files
  but does not remove files that the commit lacks, and does not move HEAD.
- The shell has no job-control commands such as `fg` or `bg`, and external
  commands are split on spaces only, without quote handling.
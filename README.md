# repotree

repotree reads the history of a repository, or a web server's access log, and
turns it into a stream of commits. Each commit has a timestamp, a username and
the files it touched. repotree can also keep the directory tree that those
files form. It tracks how files fade out when nobody touches them. It can lay
the directories out with a simple force model.

It has no dependencies outside the standard library.

## Log formats

Each format has its own reader class. Every reader is a
`repotree.commitlog.CommitLog`.

| Module              | Class               | Input                                       |
|---------------------|---------------------|---------------------------------------------|
| `repotree.git`      | `GitCommitLog`      | `git log` output, or a git working copy     |
| `repotree.gitraw`   | `GitRawCommitLog`   | `git log --reverse --raw --pretty=raw`      |
| `repotree.bzr`      | `BazaarLog`         | `bzr log` short verbose output, or a branch |
| `repotree.cvsexp`   | `CvsExpCommitLog`   | `cvs-exp.pl -notree` output                 |
| `repotree.cvs2cl`   | `Cvs2clCommitLog`   | `cvs2cl --xml` output                       |
| `repotree.custom`   | `CustomLog`         | pipe-separated custom lines                 |
| `repotree.apache`   | `ApacheCombinedLog` | Apache combined access logs                 |

Each module also exports the command that produces its format. The constants
are `GIT_LOG_COMMAND`, `GIT_RAW_LOG_COMMAND`, `BZR_LOG_COMMAND`,
`CVS_EXP_LOG_COMMAND` and `CVS2CL_LOG_COMMAND`.

A custom log line looks like this:

    1275312000|alice|A|/path/to/file|FF0000

The fields are a Unix timestamp, a username, an action and a path, then an
optional colour:

- The action is `A`, `M` or `D`. An empty action means `A`.
- An empty username becomes `Unknown`.
- The colour is six upper-case hex digits, with an optional leading `#`.

Consecutive lines with the same timestamp and username form one commit.

An Apache log turns each request into a one-file commit with the action `A`:

- The client host becomes the username.
- The query string is dropped from the URL.
- A URL that ends in `/` gets `index.html` appended.

## Reading commits

```python
from repotree.custom import CustomLog

with CustomLog("history.log") as log:
    if log.check_format():
        while not log.is_finished():
            commit = log.next_commit()
            if commit is None:
                continue
            for f in commit.files:
                print(commit.timestamp, commit.username, f.action, f.filename)
```

A reader opens one of three kinds of input:

- A log file. A reader on a file can seek with `seek_to(percent)`. It reports
  its position with `percent()`. `commit_at(percent)` peeks at a commit
  without moving the read position.
- Standard input, when you pass `"-"`. A reader on standard input cannot seek.
- A working-copy directory, for `GitCommitLog` and `BazaarLog` only. The
  reader runs `git` or `bzr` itself, writes the log to a temporary file, and
  removes that file on `close()`. `GitCommitLog` also takes an optional
  `branch` argument, which is appended to the git command.

Using the reader as a context manager calls `close()` for you.

Some readers require a particular first character in a file:

- `u` for `GitCommitLog`
- `c` for `GitRawCommitLog`
- `<` for `Cvs2clCommitLog`

A reader opened on a file that starts with any other character reports
`check_format()` as `False`.

Other helpers in `repotree.commitlog`:

- `Commit` and `CommitFile` are the records. A filename always starts with `/`.
- `munge_utf8` replaces invalid UTF-8 with `?`.
- `colour_hash` and `file_colour` give a stable colour for a file extension.
  Files without an extension are white.
- `LogFormatError` is raised when a log cannot be read.

## The directory tree

```python
from repotree.dirnode import DirNode
from repotree.file import RepoFile
from repotree import layout

removed = []
root = DirNode(None, "/")

f = RepoFile("/src/main.c", removed=removed)
root.add_file(f)
root = root.root()          # adding a file may give the root a new parent
f.touch((0.0, 1.0, 0.0))    # make the file visible

layout.apply_forces(root, root.dirmap.values())
layout.logic(root, 1.0 / 60.0)
```

`DirNode` creates and merges directories as files are added. It prunes
directories when files are removed with `remove_file`. Every node is
registered in the shared `dirmap` under its path. `find_dirs`,
`files_recursive`, `total_dir_count` and `total_file_count` query the tree.

`RepoFile` holds a file's colour and opacity. A file fades out once it has had
no action for `idle_time` seconds. After one more second it adds itself to the
shared `removed` list, and the caller then takes it out of the tree.

`repotree.action` models a user acting on a file. There are three actions:

- `CreateAction`, drawn green
- `ModifyAction`, drawn orange
- `RemoveAction`, drawn red

An action touches its file when it starts. A `RemoveAction` removes the file
when it finishes. `quad(source_pos)` returns the four vertices of the beam
from the user to the file.

`repotree.layout` holds the force-directed movement of directory nodes.
`repotree.geometry` provides the immutable `Vec2` and `vec2_hash`.
`repotree.bloom` provides `BloomBuffer`, which collects bloom quads as
`BloomVertex` values.

## What it does not do

repotree computes data only. It has no command-line program and opens no
window. It does not draw or animate anything. There are no users or cameras
moving on screen.

It does not guess a log's format for you. Try the readers in turn with
`check_format()`. There are no readers for Subversion or Mercurial logs.

## Tests

    pip install -e .[test]
    pytest
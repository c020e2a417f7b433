# duatool

Find out where the space on a disk goes.

`duatool` walks one or more paths, adds up the sizes of everything beneath
them and writes the totals in a readable form. It also provides the parts an
interactive disk-usage browser is built from: an in-memory tree of directory
entries, sorted listings, cursor navigation, size bars and recursive deletion.

## Installation

```
pip install duatool
```

## Aggregating sizes

```python
import sys

from duatool.aggregate import aggregate
from duatool.common import ByteFormat, TraversalSorting, WalkOptions

options = WalkOptions(
    count_hard_links=False,
    apparent_size=False,
    sorting=TraversalSorting.NONE,
    cross_filesystems=False,
)

result, stats = aggregate(
    sys.stdout,
    sys.stderr,        # progress messages; pass None for none
    options,
    True,              # add a "total" line when more than one path is given
    True,              # sort the lines by size, smallest first
    ByteFormat.METRIC,
    ["/var/log", "/tmp"],
)
print("entries seen:", stats.entries_traversed)
print("largest file:", stats.largest_file_in_bytes)
sys.exit(result.to_exit_code())
```

Each output line holds the size (coloured green with ANSI escape codes), the
path (cyan unless it is a regular file) and, where reading failed, a note such
as `<2 IO Errors>`. While walking, `Enumerating N items` is written to the
error stream at most every 100 ms, starting after one second.
`WalkResult.to_exit_code()` returns 1 if any error occurred, 0 otherwise.

Options of `WalkOptions`:

- `apparent_size`: count file lengths instead of allocated blocks
  (`st_blocks * 512` where the platform reports blocks).
- `count_hard_links`: count every link of a hard-linked file; by default each
  inode is counted once (see `duatool.inodefilter.InodeFilter`).
- `cross_filesystems`: descend into, and count, entries on other devices; by
  default the walk stays on the device of the starting path
  (see `duatool.crossdev`).
- `sorting`: `TraversalSorting.ALPHABETICAL_BY_FILE_NAME` visits the entries
  of each directory in name order.
- `ignore_dirs`: directories not to descend into. Pass them through
  `canonicalize_ignore_dirs` first so that relative paths, `..` and symbolic
  links resolve to the same real paths the walk compares against.
- `threads`: accepted for configuration, but the walk always runs in the
  calling thread.

`WalkOptions.iter_from_path(root, device_id, skip_root)` yields the
`WalkEntry` items of a depth-first walk that never follows symbolic links, if
you want to do your own accounting.

## Byte formats

`ByteFormat` chooses how sizes are written. For 1,000,000 bytes:

| Format   | Output       |
|----------|--------------|
| `METRIC` | `1.00 MB`    |
| `BINARY` | `976.56 KiB` |
| `BYTES`  | `1000000 b`  |
| `MB`     | `1.00 MB`    |
| `MIB`    | `0.95 MiB`   |

`GB` and `GIB` likewise always use their single unit. `width()` and
`total_width()` give the column widths used for aligned output.

## Browsing a tree

- `duatool.tree.Tree` is a directed graph of `EntryData` nodes (name, size,
  mtime, entry count, directory flag) with indices that stay stable when nodes
  are removed. `path_of` rebuilds a node's path from its ancestors' names.
- `duatool.tree_view.TreeView` wraps a tree and its virtual root: parent
  lookup, paths, sorted child listings, removing a subtree, total size, and
  recomputing sizes and entry counts up the ancestor chain. An optional
  `glob_tree_root` node may hold search results as its children; it is never
  treated as a filesystem parent.
- `duatool.entries.sorted_entries` lists the children of a node as
  `EntryDataBundle` items ordered by a `SortMode` (size, mtime, entry count or
  name, each ascending or descending; name order puts directories first).
  With `EntryCheck.POSSIBLY_COSTLY_LSTAT` each entry is checked for presence
  on disk. `fit_string_graphemes_with_ellipsis` shortens a string from the
  left to a number of grapheme clusters, prefixed with `…`.
- `duatool.navigation.Navigation` keeps the directory in view, the selection
  and a bookmark of the last selection in every directory visited;
  `CursorDirection` moves the cursor by one, by a page of ten, or to either
  end.
- `duatool.bytevis.ByteVisualization` draws a share of a total as a
  percentage, a ten-cell bar, a nineteen-cell bar, or percentage and bar:

  ```python
  from duatool.bytevis import ByteVisualization

  ByteVisualization.PERCENTAGE.display(0.5)   # "  50.0% "
  ```

## Deleting

`duatool.deletion.delete_directory_recursively(path)` removes a file or a
whole directory tree without following symbolic links. Entries that are
already gone are not errors. If anything could not be removed it raises
`DeletionError`, whose `num_errors` says how many removals failed.

## What is not included

There is no command-line program and no interactive terminal screen: the
package offers the functions and data structures above to be called from
Python. It also has no glob search over the tree and does not move entries to
a trash can.
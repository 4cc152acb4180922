# dkswarm

Bookkeeping for splitting one code change across several parallel workers
and landing their results as a clean series of git commits.

The package covers four jobs:

- **Session state on disk.** A `.dkod/` directory inside the repository holds
  a `config.toml`, one directory per session with a `manifest.json`, and one
  directory per group with a `spec.json` and an append-only `writes.jsonl`.
- **Branch lifecycle.** Each session works on its own `dk/<session-id>`
  branch, created off the main branch and force-deleted again on abort.
- **Planning.** Symbols and call edges are built into a call graph, and the
  symbols in scope are split into groups of coupled symbols (connected
  components), so each group can be handed to one worker.
- **Landing.** Single symbols are swapped for new source text, and each
  group's recorded writes become one commit.

## Installation

```
pip install dkswarm
```

Git must be on `PATH`; branch detection, branch and commit operations run it.

## Setting up a repository

```python
from pathlib import Path
from dkswarm.init import init_repo
from dkswarm.config import Config
from dkswarm.paths import Paths

repo = Path("/path/to/repo")
init_repo(repo, verify_cmd="make test")

paths = Paths(repo)
cfg = Config.load(paths.config())
print(cfg.main_branch)   # detected from HEAD, then origin/HEAD, then "main"
print(cfg.verify_cmd)    # "make test"
```

`init_repo` can be run more than once. It never overwrites an existing
`config.toml`, even when called with a different `verify_cmd`. It raises
`dkswarm.errors.InvalidStateError` if the repository root does not exist.

## Sessions and groups

```python
from dkswarm.session import Manifest, SessionId, SessionStatus
from dkswarm.group import GroupSpec, GroupStatus, SymbolRef, WriteLog, WriteRecord

sid = SessionId.generate()          # "sess-<16 hex>-<16 hex>"
Manifest(
    session_id=sid,
    task_prompt="rename the login helpers",
    created_at="2026-04-24T12:00:00Z",
    status=SessionStatus.PLANNED,
    group_ids=["g1"],
).save(paths)

GroupSpec(
    id="g1",
    symbols=[SymbolRef("auth::login", Path("src/auth.rs"), "function")],
    agent_prompt="rewrite login",
    status=GroupStatus.PENDING,
).save(paths, sid)

log = WriteLog.open(paths, sid, "g1")
log.append(WriteRecord("auth::login", Path("src/auth.rs"), "2026-04-24T12:00:00Z"))
print(log.read_all())
```

Manifests and group specs are written atomically (a `.tmp` sibling renamed
into place). `Manifest.load` and `GroupSpec.load` raise `InvalidStateError`
when the id stored in the file does not match the one asked for, and
`JsonFormatError` when the file is malformed. A write log that was never
appended to reads back as an empty list.

Session and group ids must each be a single plain path component. `..`,
`.`, empty strings, absolute paths and ids that contain a separator raise
`dkswarm.errors.InvalidComponentError`. `SessionId.from_raw` wraps any string
without checking it; the check happens when the id is turned into a path.

## Planning

Symbols are described by `dkswarm.symbols.Symbol` (name, qualified name,
`SymbolKind`, file path, byte `Span`) and calls by `RawCallEdge`.

```python
from dkswarm.callgraph import CallGraph
from dkswarm.partition import partition

graph = CallGraph.build(symbols, edges)
plan = partition(["alpha", "beta", "gamma"], graph, 3)
for group in plan.groups:
    print(group.id, [s.qualified_name for s in group.symbols])
print(plan.warnings)
```

Edges whose caller or callee is unknown are counted by
`graph.unresolved_count()` and dropped; self-calls are ignored. Names are
looked up by qualified name first, short name second.

Groups are numbered `g1`, `g2`, … and always come out in the same order,
with symbols sorted by qualified name. If the number of connected components
does not match the target, you get a `FewerGroupsThanTarget` or
`MoreGroupsThanTarget` warning; the partition is never split or merged to hit
the target. A name in scope that does not resolve gives a
`ScopeSymbolUnknown` warning. A target below 1 raises
`InvalidPartitionError`.

## Replacing a symbol

`dkswarm.replace.replace_symbol(current_source, qualified_name, new_body_source, extract)`
puts new source text in place of a symbol's span. `extract` is your parser: a
callable taking `(source_bytes, path)` and returning `(symbols, edges)`.

The span is widened backwards to take in blank lines, `///` doc comments
(not `////`) and single-line `#[...]` attributes directly above the symbol,
so replacement text that includes them does not duplicate them; blank lines
separating the prefix from the previous item are kept. The result is
`ParsedOk` when a re-parse of the new source still finds the symbol;
otherwise it is `Fallback`, with a `reason`. Both carry `new_source`.

A missing symbol raises `SymbolNotFoundError`, a short name shared by
several symbols raises `InvalidPartitionError` listing the candidates, and a
span outside the source raises `ReplaceFailedError`.

## Committing

```python
from dkswarm import branch
from dkswarm.commit import commit_per_group

branch.create_dk_branch(repo, "main", str(sid))
commit_per_group(repo, paths, sid, ["g1", "g2"])
```

This makes one commit per group, in the order given, with the message
`group <id>: <n> symbol writes`, staging the distinct files named in that
group's write log. Commits are made under a fixed author and committer
identity (`dkod swarm <swarm@example.com>`). Groups with no recorded writes
are skipped. If a commit fails, a `GitError` is raised and the earlier
commits are not rolled back. `branch.destroy_dk_branch(repo, "main", str(sid))`
checks out the main branch and deletes the session branch.

## What the package does not do

- It contains no source parser. Symbols, call edges and the `extract`
  callable for `replace_symbol` must come from elsewhere.
- It has no command-line interface and no server; everything is used as a
  Python library.
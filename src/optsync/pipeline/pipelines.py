# topmark:header:start
#
#   project      : OptSync
#   file         : pipelines.py
#   file_relpath : src/optsync/pipeline/pipelines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Named pipeline variants (immutable step sequences).

- ``CHECK``: resolve → read → parse → render → compare
- ``SYNC``: CHECK + write

```mermaid
flowchart LR
  R[resolver] --> D[reader] --> P[parser] --> T[renderer] --> C[comparer] --> W[writer]
```
"""

from __future__ import annotations

from typing import Final

from optsync.pipeline.steps import comparer, parser, reader, renderer, resolver, writer
from optsync.pipeline.steps.base import BaseStep

CHECK_PIPELINE: Final[tuple[BaseStep, ...]] = (
    resolver.ResolverStep(),  # Locate the config file
    reader.ReaderStep(),  # Open (or create) and read it
    parser.ParserStep(),  # Apply its assignments, collect obsolete entries
    renderer.RendererStep(),  # Render the canonical image
    comparer.ComparerStep(),  # Compare original and canonical bytes
)

SYNC_PIPELINE: Final[tuple[BaseStep, ...]] = (
    *CHECK_PIPELINE,
    writer.WriterStep(),  # Rewrite the file if it changed
)

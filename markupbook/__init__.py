"""
Markupbook core package.

The notebook subsystem keeps a single Markdown file split into "pages"
(level-two sections). It exposes a pure section parser, filesystem
storage helpers, a section store with ETag-guarded writes, and a git
snapshot collaborator that can run inline or from an RQ worker.
"""

# topmark:header:start
#
#   project      : OptSync
#   file         : __init__.py
#   file_relpath : src/optsync/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core primitives shared across OptSync."""

# topmark:header:start
#
#   project      : OptSync
#   file         : __init__.py
#   file_relpath : src/optsync/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The config file synchronization pipeline."""

# topmark:header:start
#
#   project      : OptSync
#   file         : __init__.py
#   file_relpath : src/optsync/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ambient configuration for OptSync: logging setup and config file location."""

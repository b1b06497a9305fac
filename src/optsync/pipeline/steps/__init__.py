# topmark:header:start
#
#   project      : OptSync
#   file         : __init__.py
#   file_relpath : src/optsync/pipeline/steps/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Synchronization pipeline steps.

resolver → reader → parser → renderer → comparer → writer
"""

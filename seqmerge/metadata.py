"""
------------------
seqmerge.metadata
------------------

Package metadata.
"""

version = '0.3.0'

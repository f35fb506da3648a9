"""Constants for treediff: rename tracking defaults, git modes and object types, config keys."""

from __future__ import annotations

import sys

# Minimum similarity for a content (non-identical) rename, as git's 50%
DEFAULT_PERCENTAGE = 0.5

# Cap on removed x added candidates: the similarity pass is skipped above limit ** 2
DEFAULT_RENAME_LIMIT = 1000

# Blocks used by the similarity metric are lines, split further at this size
SIMILARITY_BLOCK_SIZE = 64

# Scores of differing blobs stay below 1.0, which is reserved for identical content
MAX_INEXACT_SCORE = 1.0 - sys.float_info.epsilon

# Git modes that are not file content
MODE_DIR = "040000"
MODE_GITLINK = "160000"

# Object types
OBJ_BLOB = "blob"

# Git config keys read for rename tracking
CONFIG_DIFF_RENAMES = "diff.renames"
CONFIG_DIFF_RENAME_LIMIT = "diff.renameLimit"

from __future__ import annotations

# Local git operations (config, add, commit)
GIT_TIMEOUT_SECONDS = 30.0

# Network-bound git operations (clone, push)
GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

# Checksum of a single archive
CHECKSUM_TIMEOUT_SECONDS = 60.0

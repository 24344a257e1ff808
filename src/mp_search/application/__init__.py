"""Application – query composition, results and repository orchestration."""

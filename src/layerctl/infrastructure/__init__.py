"""File-backed storage, instance registry, and graph infrastructure."""

"""Application services: settings, autosave and draft snapshots."""

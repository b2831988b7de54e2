"""Stampcard adapters for external collaborators (push delivery, cues)."""

"""
clipsplit - split a media timeline into named, selectable segments

This package provides:
- A marker/segment interval model that keeps split markers and a gapless
  segment partition consistent under every edit
- A state store that commits edits atomically and persists the session
- Lossless export of selected segments, one file each or merged, via ffmpeg
- A command line front end over the persisted session
"""

__version__ = "0.1.0"

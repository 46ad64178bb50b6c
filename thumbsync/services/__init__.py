"""Transcoder invocation and the queue that serializes it."""

from .ffmpeg_core import THUMBNAIL_HEIGHT, THUMBNAIL_WIDTH, build_thumbnail_cmd
from .transcode_queue import TranscodeQueue
from .transcoder import ThumbnailTranscoder

__all__ = [
    "THUMBNAIL_HEIGHT",
    "THUMBNAIL_WIDTH",
    "ThumbnailTranscoder",
    "TranscodeQueue",
    "build_thumbnail_cmd",
]

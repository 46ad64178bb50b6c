"""Test doubles for the transcoder and source items."""

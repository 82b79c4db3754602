"""Discord pin archive pipeline.

This package archives a channel's pinned messages as a JSON snapshot and
downloads their attachments, optionally unpinning each message afterwards.

Usage:
    python -m discord_pins.archive -t TOKEN pins CHANNEL_ID
    python -m discord_pins.archive -t TOKEN pins CHANNEL_ID --delete
"""

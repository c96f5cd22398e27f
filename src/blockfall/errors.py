from __future__ import annotations


class BlockfallError(Exception):
    """Base class for errors raised by blockfall."""


class InputSourceError(BlockfallError):
    """The input source failed; the game cannot continue."""

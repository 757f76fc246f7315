"""Periodic maintenance."""

from grantwise.infrastructure.scheduling.expiry_sweeper import ExpirySweeper

__all__ = ["ExpirySweeper"]

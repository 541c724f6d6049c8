"""Peer directory module."""

from .directory import IPeerDirectory, PeerDirectory

__all__ = ["IPeerDirectory", "PeerDirectory"]

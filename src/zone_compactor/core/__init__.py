"""Shared plumbing: errors, logging, settings, digests."""

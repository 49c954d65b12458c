"""Shared configuration, logging, errors and AWS helpers for sitesync."""

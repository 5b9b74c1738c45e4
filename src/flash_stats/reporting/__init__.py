"""Rendering of a finished run."""

from .report import build_report, dump_counters_as_json, format_periodic_summary

__all__ = ["build_report", "dump_counters_as_json", "format_periodic_summary"]

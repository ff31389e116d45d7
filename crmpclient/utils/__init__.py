"""Utility functions for crmpclient."""

from crmpclient.utils.env import load_env_file_if_present, parse_env_line, read_credentials

__all__ = ["load_env_file_if_present", "parse_env_line", "read_credentials"]

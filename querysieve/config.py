"""
Configuration helpers for querysieve.
Supports environment variables so request parameter names can be changed per deployment.
"""

import os
from typing import Dict


DEFAULT_SORT_PARAM = "sort"
DEFAULT_LIMIT_PARAM = "limit"
DEFAULT_OFFSET_PARAM = "offset"


class Config:
    """
    Configuration helper that reads from environment variables.

    Environment variables:
        QUERYSIEVE_SORT_PARAM: Request parameter holding the sort string (default: sort)
        QUERYSIEVE_LIMIT_PARAM: Parameter overriding the page size (default: limit)
        QUERYSIEVE_OFFSET_PARAM: Parameter overriding the page offset (default: offset)
    """

    @staticmethod
    def defaults() -> Dict[str, str]:
        """Parameter names used when nothing is configured."""
        return {
            "sort_param": DEFAULT_SORT_PARAM,
            "limit_param": DEFAULT_LIMIT_PARAM,
            "offset_param": DEFAULT_OFFSET_PARAM,
        }

    @staticmethod
    def from_env() -> Dict[str, str]:
        """
        Create configuration from environment variables.

        Returns:
            Dict of keyword arguments for QuerySieve

        Example:
            from querysieve import QuerySieve
            from querysieve.config import Config

            sieve = QuerySieve(builder, request, **Config.from_env())
        """
        return {
            "sort_param": os.getenv("QUERYSIEVE_SORT_PARAM", DEFAULT_SORT_PARAM),
            "limit_param": os.getenv("QUERYSIEVE_LIMIT_PARAM", DEFAULT_LIMIT_PARAM),
            "offset_param": os.getenv("QUERYSIEVE_OFFSET_PARAM", DEFAULT_OFFSET_PARAM),
        }

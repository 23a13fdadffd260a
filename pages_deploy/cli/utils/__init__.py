"""CLI utility functions"""

from .output import (
    console,
    format_deployment_descriptor,
    format_status_view,
    format_site_list,
    format_json,
    print_failure,
    print_error,
    print_warning,
    print_success,
    exit_with_error,
)

__all__ = [
    'console',

    # Result formatting
    'format_deployment_descriptor',
    'format_status_view',
    'format_site_list',
    'format_json',

    # Messages
    'print_failure',
    'print_error',
    'print_warning',
    'print_success',
    'exit_with_error',
]

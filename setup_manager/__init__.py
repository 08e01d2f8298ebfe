"""
Setup Manager Module

Downloads and arranges the third-party tools, databases and reference data
used by the variant analysis pipeline.

Workflow (task 'all'):
1. install_tool_gatk() / install_tool_annovar() - tools_install
2. setup_tool_annovar() - tools_setup
3. install_databases() - db_install
4. setup_databases() - db_setup
5. setup_references() - ref
6. setup_example() - example

run_task() runs the steps of a single task in that order.
"""

from .fetcher import fetch_url, fetch_large_file, require_downloader
from .installer import extract_archive, merge_directory, normalize_directory
from .tasks import run_task, build_plan, TASK_STEPS

__version__ = "0.1.0"
__all__ = [
    'run_task', 'build_plan', 'TASK_STEPS',
    'fetch_url', 'fetch_large_file', 'require_downloader',
    'extract_archive', 'merge_directory', 'normalize_directory',
]

"""
Task Orchestrator - Map a task name to its setup steps and run them in order.

Tasks:
    tools_install  GATK + ANNOVAR into tools/
    tools_setup    ANNOVAR annotation datasets
    db_install     dbSNP, Cancer Hotspots, DGIdb into databases/
    db_setup       gene-set databases from MSigDB hallmarks (Rscript)
    ref            reference chromosomes, genome and mappability
    example        capture regions and example input data
    all            everything above, in that order

Every run starts from the first step of the task; the first failing step
stops the run and nothing already installed is rolled back.
"""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .config import (
    ROOT_DIR,
    TOOLS_DIR,
    DATABASES_DIR,
    VALID_TASKS,
    DEFAULT_TASK,
    GATK_URL,
    GATK_PREFIX,
    GATK_DIRNAME,
    ANNOVAR_REGISTER_URL,
    ANNOVAR_URL_ENV,
    ANNOVAR_DIRNAME,
    ANNOVAR_BUILD,
    ANNOVAR_DATASETS,
    DATABASE_FILES,
    GENESET_SCRIPT,
    REFERENCE_ARCHIVES,
    EXAMPLE_ARCHIVES,
)
from .fetcher import fetch_url, fetch_large_file
from .installer import extract_archive, normalize_directory

TASK_STEPS = {
    'tools_install': ['install_tool_gatk', 'install_tool_annovar'],
    'tools_setup': ['setup_tool_annovar'],
    'db_install': ['install_databases'],
    'db_setup': ['setup_databases'],
    'ref': ['setup_references'],
    'example': ['setup_example'],
}
TASK_STEPS['all'] = [
    step
    for task in ('tools_install', 'tools_setup', 'db_install', 'db_setup', 'ref', 'example')
    for step in TASK_STEPS[task]
]

MISSING_HALLMARKS = (
    "no hallmarks file provided! Please provide the h.all.vX.X.entrez.gmt file from MSigDB."
)
MISSING_ANNOVAR_URL = (
    f"no annovar download link provided! Please visit {ANNOVAR_REGISTER_URL} "
    f"to get the link via email and pass it with -u or ${ANNOVAR_URL_ENV}."
)


# TOOLS

def install_tool_gatk(root: Path = ROOT_DIR):
    """Download GATK and unpack it to tools/gatk."""
    print("installing tool gatk")
    tools_dir = Path(root) / TOOLS_DIR

    print("fetching gatk")
    archive = fetch_url(GATK_URL, tools_dir / "gatk.tar.bz2")
    extract_archive(archive, tools_dir, compression='bz2')

    # drop the version from the directory name
    normalize_directory(tools_dir, GATK_PREFIX, GATK_DIRNAME)

    print("done")


def install_tool_annovar(root: Path = ROOT_DIR, url: Optional[str] = None):
    """
    Download ANNOVAR from the personal link sent after registration.

    Args:
        root: Layout root
        url: ANNOVAR download link
    """
    print("installing tool annovar")
    if not url:
        raise ValueError(MISSING_ANNOVAR_URL)

    tools_dir = Path(root) / TOOLS_DIR

    print("fetching annovar")
    archive = fetch_url(url, tools_dir / "annovar.tar.gz")
    extract_archive(archive, tools_dir, compression='gz')

    print("done")


def setup_tool_annovar(root: Path = ROOT_DIR):
    """Download the annotation datasets through ANNOVAR itself."""
    print("setup tool annovar")
    print("download databases")
    annovar_dir = Path(root) / TOOLS_DIR / ANNOVAR_DIRNAME

    for dataset in ANNOVAR_DATASETS:
        print(f"   -> {dataset}")
        subprocess.run(
            ["./annotate_variation.pl", "-buildver", ANNOVAR_BUILD, "-downdb",
             "-webfrom", "annovar", dataset, "humandb/"],
            cwd=annovar_dir,
            check=True
        )

    print("done")


# DATABASES

def install_databases(root: Path = ROOT_DIR):
    print("installing databases")
    db_dir = Path(root) / DATABASES_DIR

    for url, filename in DATABASE_FILES:
        print(f"   -> {filename}")
        fetch_url(url, db_dir / filename)

    print("done")


def setup_databases(root: Path = ROOT_DIR, hallmarks: Optional[str] = None):
    """
    Derive the gene-set databases from the MSigDB hallmarks file with Rscript.

    Args:
        root: Layout root
        hallmarks: Path to h.all.vX.X.entrez.gmt
    """
    print("setup databases")
    if not hallmarks:
        raise ValueError(MISSING_HALLMARKS)

    # Rscript runs inside databases/, so a relative path is read from there
    db_dir = Path(root) / DATABASES_DIR
    if not (db_dir / hallmarks).is_file():
        raise FileNotFoundError(f"Hallmarks file not found: {hallmarks} (relative to {db_dir})")
    print(hallmarks)

    rscript = shutil.which("Rscript")
    if rscript is None:
        raise RuntimeError("Rscript needs to be available and in PATH in order to install the databases")

    subprocess.run(
        [rscript, "--vanilla", GENESET_SCRIPT, str(hallmarks)],
        cwd=db_dir,
        check=True
    )

    print("done")


# REF / EXAMPLE

def _install_large_archives(root: Path, archives):
    root = Path(root)
    for file_id, filename, target in archives:
        print(f"   -> {filename}")
        archive = fetch_large_file(file_id, root / filename)
        extract_archive(archive, root / target, compression='gz')


def setup_references(root: Path = ROOT_DIR):
    print("setting up reference data")
    _install_large_archives(root, REFERENCE_ARCHIVES)
    print("done")


def setup_example(root: Path = ROOT_DIR):
    print("setting up example data")
    _install_large_archives(root, EXAMPLE_ARCHIVES)
    print("done")


# ORCHESTRATION

def check_preconditions(task: str, hallmarks: Optional[str] = None,
                        annovar_url: Optional[str] = None):
    """Fail before any download if a value required by the task's steps is missing."""
    if task not in VALID_TASKS:
        raise ValueError(
            f"unknown task: {task}\nuse one of the following values: {' '.join(VALID_TASKS)}"
        )

    steps = TASK_STEPS[task]
    if 'setup_databases' in steps and not hallmarks:
        raise ValueError(MISSING_HALLMARKS)
    if 'install_tool_annovar' in steps and not annovar_url:
        raise ValueError(MISSING_ANNOVAR_URL)


def build_plan(task: str, root: Path = ROOT_DIR, hallmarks: Optional[str] = None,
               annovar_url: Optional[str] = None) -> List[Tuple[str, Callable[[], None]]]:
    """Return the (step name, action) pairs of a task in execution order."""
    actions = {
        'install_tool_gatk': lambda: install_tool_gatk(root),
        'install_tool_annovar': lambda: install_tool_annovar(root, annovar_url),
        'setup_tool_annovar': lambda: setup_tool_annovar(root),
        'install_databases': lambda: install_databases(root),
        'setup_databases': lambda: setup_databases(root, hallmarks),
        'setup_references': lambda: setup_references(root),
        'setup_example': lambda: setup_example(root),
    }
    return [(name, actions[name]) for name in TASK_STEPS[task]]


def run_task(
    task: str = DEFAULT_TASK,
    root: Path = ROOT_DIR,
    hallmarks: Optional[str] = None,
    annovar_url: Optional[str] = None,
    progress_callback: Optional[Callable[[str, int, int], None]] = None
) -> List[str]:
    """
    Run all steps of a task.

    Args:
        task: One of VALID_TASKS
        root: Layout root
        hallmarks: MSigDB hallmarks file (db_setup)
        annovar_url: ANNOVAR download link (tools_install), defaults to $ANNOVAR_URL
        progress_callback: Optional callback(step_name, current, total)

    Returns:
        Names of the steps that ran
    """
    if annovar_url is None:
        annovar_url = os.environ.get(ANNOVAR_URL_ENV)

    check_preconditions(task, hallmarks=hallmarks, annovar_url=annovar_url)
    plan = build_plan(task, root=root, hallmarks=hallmarks, annovar_url=annovar_url)

    total = len(plan)
    completed = []
    for idx, (name, action) in enumerate(plan, 1):
        if progress_callback:
            progress_callback(name, idx, total)
        action()
        completed.append(name)

    return completed

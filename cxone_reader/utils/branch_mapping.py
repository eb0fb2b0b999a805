"""Loading of the project-to-branch mapping file."""

from pathlib import Path

import pandas as pd

from cxone_reader.utils.exceptions import ConfigurationError

PROJECT_COLUMN = 'Projects'
BRANCH_COLUMN = 'Branches'


def load_branch_mapping(mapping_file):
    """Read a ``Projects,Branches`` CSV into a project name to branches mapping.

    Every row is kept, so duplicate projects stay visible to the caller.

    Args:
        mapping_file (str): Path to the CSV file

    Returns:
        dict: Project name to list of branch names, in file order

    Raises:
        ConfigurationError: If the file is missing or lacks the expected columns
    """
    path = Path(mapping_file)
    if not path.is_file():
        raise ConfigurationError(f"Branch mapping file not found: {mapping_file}")

    try:
        df = pd.read_csv(str(path), dtype=str, keep_default_na=False, skipinitialspace=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Could not read branch mapping file {mapping_file}: {e}") from e

    df.columns = [str(column).strip() for column in df.columns]
    missing = {PROJECT_COLUMN, BRANCH_COLUMN} - set(df.columns)
    if missing:
        raise ConfigurationError(
            f"Branch mapping file must have a '{PROJECT_COLUMN},{BRANCH_COLUMN}' header "
            f"(missing: {', '.join(sorted(missing))})"
        )

    mapping = {}
    for project, branch in zip(df[PROJECT_COLUMN], df[BRANCH_COLUMN]):
        project = project.strip()
        if not project:
            continue
        mapping.setdefault(project, []).append(branch.strip())
    return mapping

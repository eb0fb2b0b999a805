#!/usr/bin/env python3
"""
CxOne Reader

Lists projects, scans, last scans and scan results from CxOne and writes them
to CSV or Excel.
"""

import sys
import argparse
import time
from cxone_reader.client import CxOneClient
from cxone_reader.models.project import Project
from cxone_reader.models.result import Result
from cxone_reader.models.scan import Scan
from cxone_reader.utils.config import Config, OUTPUT_FORMATS
from cxone_reader.utils.credentials import CredentialPrompt
from cxone_reader.utils.branch_mapping import load_branch_mapping
from cxone_reader.utils.debug_logger import DebugLogger
from cxone_reader.utils.exceptions import CxOneError, InvalidCredential
from cxone_reader.utils.exporter import RecordExporter
from cxone_reader.utils.file_manager import FileManager
from cxone_reader.utils.progress import ProgressTracker, StageTracker
from cxone_reader.operations.scan_discovery import validate_days_back

MAX_LOGIN_ATTEMPTS = 3

RECORD_CLASSES = {
    'projects': Project,
    'scans': Scan,
    'last_scans': Scan,
    'results': Result,
}


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='CxOne Reader - Export projects, scans and results from CxOne'
    )
    parser.add_argument('--env-file', default='.env', help='Path to environment file (default: .env)')
    parser.add_argument('--api-key', help='API key for authentication')
    parser.add_argument('--debug', action='store_true', help='Enable debug output')
    parser.add_argument('--output-dir', help='Output directory')
    parser.add_argument('--format', choices=OUTPUT_FORMATS, help='Output format (default: csv)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    projects = subparsers.add_parser('projects', help='List projects')
    _add_project_filters(projects)
    projects.add_argument('--branches', action='store_true', help='Also fetch branch names')

    scans = subparsers.add_parser('scans', help='List scans')
    scans.add_argument('--statuses', help='Comma separated scan statuses, e.g. Completed,Failed')
    scans.add_argument('--days', type=int, default=0,
                       help='Only scans from the last N days (1-366); 0 for all history')

    results = subparsers.add_parser('results', help='List the results of a scan')
    results.add_argument('--scan-id', required=True, help='Scan ID')

    last_scans = subparsers.add_parser('last-scans', help='Last completed scan of each project')
    _add_project_filters(last_scans)
    branch_mode = last_scans.add_mutually_exclusive_group()
    branch_mode.add_argument('--main-branch', action='store_true',
                             help="Use each project's main branch")
    branch_mode.add_argument('--branch-mapping',
                             help='CSV file with a Projects,Branches header, one row per project')

    return parser.parse_args(argv)


def _add_project_filters(subparser):
    filters = subparser.add_mutually_exclusive_group()
    filters.add_argument('--names', help='Comma separated project names')
    filters.add_argument('--ids', help='Comma separated project IDs')


def login(config, interactive):
    """Log in with the configured API key, prompting for one if needed.

    Returns:
        CxOneClient: Authenticated client, or None if the user cancelled
    """
    prompt = CredentialPrompt()
    api_key = config.api_key

    for attempt in range(1, MAX_LOGIN_ATTEMPTS + 1):
        if not api_key:
            if not interactive:
                raise InvalidCredential("No API key configured (set CXONE_API_KEY or pass --api-key)")
            credentials = prompt.ask()
            if credentials is None:
                return None
            api_key = credentials['api_key']

        try:
            return CxOneClient.login(api_key, config)
        except InvalidCredential as e:
            if not interactive or attempt == MAX_LOGIN_ATTEMPTS:
                raise
            print(f"Login failed: {e}. Please try again.")
            api_key = None

    return None


def run_command(args, config, client, stage_tracker):
    """Run the selected command.

    Returns:
        tuple: (kind, records)
    """
    if args.command == 'projects':
        stage_tracker.start_stage("Fetching Projects")
        projects = client.get_projects(names=args.names, ids=args.ids, include_branches=args.branches)
        stage_tracker.end_stage("Fetching Projects", total_projects=len(projects))
        return 'projects', projects

    if args.command == 'scans':
        stage_tracker.start_stage("Fetching Scans")
        scans = client.get_scans(statuses=args.statuses, days_back=args.days)
        stage_tracker.end_stage("Fetching Scans", total_scans=len(scans))
        return 'scans', scans

    if args.command == 'results':
        stage_tracker.start_stage("Fetching Results")
        results = client.get_results(args.scan_id)
        stage_tracker.end_stage("Fetching Results", scan_id=args.scan_id, total_results=len(results))
        return 'results', results

    # last-scans
    branch_mapping = None
    if config.branch_mapping_file and not args.main_branch:
        branch_mapping = load_branch_mapping(config.branch_mapping_file)

    stage_tracker.start_stage("Fetching Projects")
    projects = client.get_projects(names=args.names, ids=args.ids)
    stage_tracker.end_stage("Fetching Projects", total_projects=len(projects))

    stage_tracker.start_stage("Finding Last Scans")
    scans = client.get_last_scans(projects, use_main_branch=args.main_branch,
                                  branch_mapping=branch_mapping)
    stage_tracker.end_stage(
        "Finding Last Scans",
        scans_found=len(scans),
        projects_without_scan=len(projects) - len(scans)
    )
    return 'last_scans', scans


def main(argv=None):
    """Main entry point."""
    start_time = time.time()
    args = parse_args(argv)

    config = Config.from_env(args.env_file)
    Config.from_args(args, config)

    is_valid, error = config.validate()
    if not is_valid:
        print(f"Configuration error: {error}")
        sys.exit(1)
    if args.command == 'scans':
        try:
            validate_days_back(args.days, config.max_days_back)
        except ValueError as e:
            print(f"Configuration error: {e}")
            sys.exit(1)

    debug_logger = None
    try:
        client = login(config, interactive=sys.stdin.isatty())
        if client is None:
            print("Login cancelled.")
            sys.exit(0)

        print("=" * 80)
        print("CxOne Reader")
        print("=" * 80)
        print(f"Tenant: {client.tenant}")
        print(f"Base URL: {client.session.base_uri}")
        print(f"Command: {args.command}")
        print("=" * 80)

        file_manager = FileManager(config, client.tenant, config.debug)
        file_manager.setup_directories()

        kind = args.command.replace('-', '_')
        debug_log_path = file_manager.get_debug_log_path(kind)
        debug_logger = DebugLogger(debug_log_path, secrets=[client.session.api_key])
        debug_logger.log("CxOne Reader - Debug Log")
        debug_logger.log(f"Tenant: {client.tenant}")
        debug_logger.log(f"Base URL: {client.session.base_uri}")
        debug_logger.log(f"Command: {args.command}")

        client.logger = debug_logger
        client.api_client.logger = debug_logger
        client.session.logger = debug_logger
        client.progress = ProgressTracker(enabled=sys.stdout.isatty())

        kind, records = run_command(args, config, client, StageTracker())

        output_path = file_manager.get_output_file_path(kind)
        exporter = RecordExporter(config.debug, debug_logger)
        rows = exporter.export(records, output_path, config.output_format,
                               record_class=RECORD_CLASSES[kind])

        elapsed = int(time.time() - start_time)
        debug_logger.log(f"Wrote {rows} {kind} rows to {output_path} in {elapsed}s")
        debug_logger.close()

        print("\n" + "=" * 80)
        print("✓ Successfully completed!")
        print(f"  - Records: {rows:,}")
        print(f"  - Output: {output_path}")
        print(f"  - Debug Log: {debug_log_path}")
        print(f"  - Execution time: {elapsed // 60}m {elapsed % 60}s")
        print("=" * 80)

    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.")
        if debug_logger:
            debug_logger.log("INTERRUPTED: Operation cancelled by user")
            debug_logger.close()
        sys.exit(1)
    except (CxOneError, ValueError) as e:
        print(f"\nError: {e}")
        if debug_logger:
            debug_logger.log(f"FATAL ERROR: {e}")
            debug_logger.close()
        sys.exit(1)


if __name__ == "__main__":
    main()

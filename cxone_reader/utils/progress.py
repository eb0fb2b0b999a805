"""Progress display for per-project loops."""

import sys

from tqdm import tqdm


class ProgressTracker:
    """Wrap a single tqdm bar shared by the operations of one command."""

    def __init__(self, enabled=True):
        """Initialize the progress tracker.

        Args:
            enabled (bool): Show bars; disable for non-interactive runs
        """
        self.enabled = enabled
        self.current_bar = None

    def create_bar(self, total, description, unit='projects'):
        """Replace the current bar with a new one.

        Args:
            total (int): Total number of items
            description (str): Description of the operation
            unit (str): Unit name for items

        Returns:
            tqdm: Progress bar instance
        """
        self.close()
        self.current_bar = tqdm(
            total=total,
            desc=description,
            unit=unit,
            ncols=100,
            file=sys.stdout,
            disable=not self.enabled
        )
        return self.current_bar

    def update(self, n=1):
        if self.current_bar:
            self.current_bar.update(n)

    def set_postfix(self, **kwargs):
        if self.current_bar:
            self.current_bar.set_postfix(**kwargs)

    def print(self, message):
        """Print a message without breaking the bar."""
        if self.current_bar:
            self.current_bar.write(message)
        else:
            print(message)

    def close(self):
        if self.current_bar:
            self.current_bar.close()
            self.current_bar = None


class StageTracker:
    """Print banners and statistics for the stages of a command."""

    def __init__(self):
        self.stats = {}

    def start_stage(self, stage_name):
        print(f"\n{'=' * 80}")
        print(f"Stage: {stage_name}")
        print(f"{'=' * 80}")
        self.stats[stage_name] = {}

    def end_stage(self, stage_name, **stats):
        """End a stage and record statistics.

        Args:
            stage_name (str): Name of the stage
            **stats: Statistics to record
        """
        self.stats.setdefault(stage_name, {}).update(stats)

        print(f"\n{stage_name} completed:")
        for key, value in stats.items():
            print(f"  - {key}: {value}")

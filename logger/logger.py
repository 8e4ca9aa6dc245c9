import json
import os
from datetime import datetime, timezone

class JSONLogger:
    """Appends JSON lines under output_directory, one file per UTC day and kind."""

    def __init__(self, output_directory="logs/", log_file_prefix="bbtrace_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.rotate()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _append(self, path, entries):
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")
        return path

    def log(self, entry: dict):
        """Log a single entry to the main log."""
        return self._append(self.current_log, [entry])

    def log_batch(self, entries: list):
        return self._append(self.current_log, entries)

    def log_run(self, machine: str, steps: int, halted: bool, **extra):
        """Record one simulation of an encoded machine."""
        entry = {
            "time": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "machine": machine,
            "steps": steps,
            "halted": halted,
        }
        entry.update(extra)
        return self.log(entry)

    def rotate(self):
        """Point the main log at the current UTC day."""
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def log_halting(self, entries: list):
        """Pool results for machines that halted within the step bound."""
        return self._append(os.path.join(self.output_directory, f"halting_{self.today}.jsonl"), entries)

    def log_non_halting(self, entries: list):
        """Pool results for machines still running at the step bound."""
        return self._append(os.path.join(self.output_directory, f"non_halting_{self.today}.jsonl"), entries)

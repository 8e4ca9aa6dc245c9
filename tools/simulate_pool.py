# tools/simulate_pool.py

import argparse
import json
import os
from pathlib import Path
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from logger.logger import JSONLogger
from simulator.decision import decision_status_from_api
from simulator.errors import MachineError
from simulator.evaluator import evaluate_batch
from simulator.turing_machine import TuringMachine

# === Utility Loaders ===
def parse_pool_line(line):
    """Split a pool line into (encoded machine, API status or None)."""
    parts = line.split()
    return parts[0], (parts[1] if len(parts) > 1 else None)

def load_machine_pool(machine_pool_file):
    with open(machine_pool_file, "r", encoding="utf-8") as f:
        machines = [parse_pool_line(line) for line in f if line.strip()]
    return machines

def load_checkpoint(checkpoint_path):
    if checkpoint_path.exists():
        with open(checkpoint_path, "r", encoding="utf-8") as f:
            checkpoint = json.load(f)
        return checkpoint.get("completed", [])
    return []

def save_checkpoint(completed, checkpoint_path):
    with open(checkpoint_path, "w", encoding="utf-8") as f:
        json.dump({"completed": completed}, f, indent=4)

def console_message(msg):
    print(f"[{Path(os.getcwd()).name}] {msg}")

# === Batch Runner ===
def run_batch(batch, max_steps):
    """Decode and evaluate one batch. Returns result entries; undecodable machines are skipped."""
    machines, accepted = [], []
    for encoded, api_status in batch:
        try:
            machines.append(TuringMachine.from_b64(encoded))
            accepted.append((encoded, api_status))
        except MachineError as e:
            console_message(f"[WARNING] Failed to decode {encoded}: {e}")

    steps, halted, ones = evaluate_batch(machines, max_steps=max_steps)

    entries = []
    for idx, (encoded, api_status) in enumerate(accepted):
        status = decision_status_from_api(api_status)
        entries.append({
            "machine": encoded,
            "steps_taken": int(steps[idx]),
            "halted": bool(halted[idx]),
            "ones": int(ones[idx]),
            "decision_status": status.name if status is not None else None
        })
    return entries

# === Main Simulation Runner ===
def simulate_pool(machine_pool_file, output_name="results", results_root="results", batch_size=4096,
                  max_steps=1000, logger=None):
    pool_name = Path(machine_pool_file).stem
    results_folder = Path(results_root) / pool_name
    results_folder.mkdir(parents=True, exist_ok=True)
    results_file = results_folder / f"{output_name}.jsonl"
    checkpoint_file = results_folder / f"{output_name}_checkpoint.json"

    all_machines = load_machine_pool(machine_pool_file)
    completed = load_checkpoint(checkpoint_file)
    done = set(completed)

    pending_machines = [m for m in all_machines if m[0] not in done]
    console_message(f"Loaded {len(all_machines):,} total machines. {len(pending_machines):,} pending.")

    with open(results_file, "a", encoding="utf-8") as results_fh, Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("{task.completed}/{task.total} Machines"),
            TimeElapsedColumn()
    ) as progress:

        task = progress.add_task("[cyan]Simulating...", total=len(pending_machines))

        for batch_start in range(0, len(pending_machines), batch_size):
            batch = pending_machines[batch_start:batch_start + batch_size]
            batch_results = run_batch(batch, max_steps)

            # === BULK WRITE once per batch ===
            for entry in batch_results:
                results_fh.write(json.dumps(entry) + "\n")
            results_fh.flush()

            if logger is not None:
                logger.log_halting([e for e in batch_results if e["halted"]])
                logger.log_non_halting([e for e in batch_results if not e["halted"]])

            completed.extend(encoded for encoded, _ in batch)
            save_checkpoint(completed, checkpoint_file)
            progress.update(task, advance=len(batch))

    console_message(f"[SUCCESS] All machines simulated. Results saved to {results_file}")
    return results_file


# === CLI ===
def main():
    parser = argparse.ArgumentParser(description="Simulate a pool of encoded machines with checkpointing.")
    parser.add_argument("--pool", required=True, help="Path to machine pool file (one encoded machine per line)")
    parser.add_argument("--output", default="results", help="Output result file name (default: results)")
    parser.add_argument("--batch_size", type=int, default=4096, help="Batch size per save/checkpoint")
    parser.add_argument("--max_steps", type=int, default=1000, help="Maximum steps before timeout")
    parser.add_argument("--log_dir", default="logs/", help="Directory for halting/non-halting logs")
    args = parser.parse_args()

    simulate_pool(
        args.pool,
        args.output,
        batch_size=args.batch_size,
        max_steps=args.max_steps,
        logger=JSONLogger(args.log_dir)
    )

if __name__ == "__main__":
    main()

# tools/pool_builder.py

import argparse
from pathlib import Path
from rich.console import Console
from rich.prompt import Prompt, IntPrompt, Confirm
from rich.table import Table

from simulator.database import iter_machines, machine_count, read_header
from simulator.export import to_standard_text
from simulator.errors import MachineError
from simulator.turing_machine import TuringMachine

console = Console()

def load_db_machines(db_path, start=0, count=None):
    """Load (index, machine) pairs from a seed database."""
    if not Path(db_path).exists():
        console.print(f"[red]Database file not found: {db_path}[/red]")
        raise FileNotFoundError(db_path)
    return list(iter_machines(db_path, start, count))

def save_pool(machines, output_path):
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        for machine in machines:
            f.write(machine.to_b64() + "\n")
    return output_path

def build_pool(db_path, output_path, start=0, count=None):
    """Write a pool file for a contiguous index range of the database."""
    machines = [machine for _, machine in load_db_machines(db_path, start, count)]
    save_pool(machines, output_path)
    console.print(f"[green]Saved pool with {len(machines):,} machines to {output_path}.[/green]")
    return machines

def interactive_build(db_path, output_path):
    header = read_header(db_path)
    total = machine_count(db_path)
    console.print(f"[green]Database holds {total:,} machines "
                  f"({header.undecided_time:,} time / {header.undecided_space:,} space undecided).[/green]")

    selected_machines = []

    while True:
        console.print("\n[bold cyan]Machine Pool Builder Menu[/bold cyan]")
        console.print("[1] List some machines")
        console.print("[2] Add a machine by index")
        console.print("[3] Add a machine by encoding")
        console.print("[4] Add an index range")
        console.print("[5] Save and exit")
        console.print("[6] Cancel and exit without saving")

        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4", "5", "6"], default="6")

        if choice == "1":
            start = IntPrompt.ask("Start index", default=0)
            table = Table(title="Available Machines (sample 10)")
            table.add_column("Index")
            table.add_column("Machine")
            table.add_column("Encoded")
            for idx, machine in load_db_machines(db_path, start, 10):
                table.add_row(f"{idx:,}", to_standard_text(machine), machine.to_b64())
            console.print(table)

        elif choice == "2":
            idx = IntPrompt.ask("Machine index")
            if 0 <= idx < total:
                selected_machines.extend(m for _, m in load_db_machines(db_path, idx, 1))
                console.print(f"[green]Added #{idx:,}.[/green]")
            else:
                console.print(f"[red]Index {idx} outside database![/red]")

        elif choice == "3":
            encoded = Prompt.ask("Encoded machine (m...)")
            try:
                selected_machines.append(TuringMachine.from_b64(encoded))
                console.print(f"[green]Added {encoded}.[/green]")
            except MachineError as e:
                console.print(f"[red]{e}[/red]")

        elif choice == "4":
            start = IntPrompt.ask("Start index", default=0)
            count = IntPrompt.ask("How many", default=1000)
            if count > 100_000 and not Confirm.ask(f"Add {count:,} machines?", default=False):
                continue
            added = load_db_machines(db_path, start, count)
            selected_machines.extend(m for _, m in added)
            console.print(f"[green]Added {len(added):,} machines.[/green]")

        elif choice == "5":
            if selected_machines:
                save_pool(list(dict.fromkeys(selected_machines)), output_path)
                console.print(f"[green]Saved pool with {len(selected_machines):,} machines to {output_path}.[/green]")
            else:
                console.print("[yellow]No machines selected, nothing saved.[/yellow]")
            break

        elif choice == "6":
            console.print("[red]Canceled. No pool saved.[/red]")
            break

def main():
    parser = argparse.ArgumentParser(description="Pool Builder for seed database machines")
    parser.add_argument("--db", required=True, help="Seed database file")
    parser.add_argument("--output", required=True, help="Path to save pool file (e.g., pools/custom_pool.txt)")
    parser.add_argument("--start", type=int, help="First index for a non-interactive build")
    parser.add_argument("--count", type=int, help="Number of machines for a non-interactive build")
    args = parser.parse_args()

    if args.start is not None:
        build_pool(args.db, args.output, args.start, args.count)
    else:
        interactive_build(args.db, args.output)

if __name__ == "__main__":
    main()

# app.py

import argparse
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt, IntPrompt, FloatPrompt, Confirm
from rich.table import Table

from config.config_loader import DEFAULT_CONFIG_PATH, load_config, save_config
from logger.logger import JSONLogger
from simulator.errors import MachineError
from simulator.export import to_standard_text, to_table_text, trace_to_text
from simulator.history import run
from simulator.image import save_png
from simulator.raster import ViewTransform, render_view, trace_to_image
from simulator.turing_machine import state_letter
from tools.ruleset_inspect import load_machine
from tools.simulate_pool import simulate_pool

console = Console()

BB2_CHAMPION = "1RB1LB_1LA1RZ"

# === Utilities ===
def load_runtime_config(path=DEFAULT_CONFIG_PATH):
    try:
        return load_config(path)
    except FileNotFoundError:
        console.print("[red]Error: runtime_config.json not found![/red]")
        raise SystemExit(1)

def make_logger(config):
    return JSONLogger(config["output_directory"], config["log_file_prefix"])

def ask_machine():
    while True:
        text = Prompt.ask("Machine (m... or 1RB1LB_1LA---)", default=BB2_CHAMPION)
        try:
            return load_machine(text)
        except MachineError as e:
            console.print(f"[red]{e}[/red]")

def show_main_menu():
    console.print("\n[bold cyan]Busy Beaver Trace[/bold cyan]")
    console.print("[1] Inspect Machine")
    console.print("[2] Trace Machine")
    console.print("[3] Export Trace Image")
    console.print("[4] Export turingmachine.io Table")
    console.print("[5] Simulate Machine Pool")
    console.print("[6] Edit Config")
    console.print("[7] Exit")


def print_machine_table(machine):
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("State", justify="center")
    table.add_column("0", justify="center")
    table.add_column("1", justify="center")
    for state in range(machine.num_states):
        cells = []
        for symbol in (0, 1):
            write_symbol, move, next_state = machine.transition(state, symbol)
            cells.append("[red]HALT[/red]" if next_state is None
                         else f"{write_symbol}{'RL'[move]}{state_letter(next_state)}")
        table.add_row(state_letter(state), *cells)
    console.print(table)


def handle_inspect():
    console.print("\n[bold]Inspect Machine[/bold]")
    machine = ask_machine()
    console.print(f"Encoded:  [cyan]{machine.to_b64()}[/cyan]")
    console.print(f"Standard: [cyan]{to_standard_text(machine)}[/cyan]")
    print_machine_table(machine)


def run_trace(machine, config, logger, show_text=True):
    history = run(machine, config["initial_tape"], config["max_steps"])
    if show_text:
        console.print(trace_to_text(history), highlight=False)

    status = "[green]halted[/green]" if history.halted else "[yellow]still running[/yellow]"
    console.print(f"{history.steps:,} steps, {status}, {history.final.tape.count_ones():,} ones on tape.")
    logger.log_run(machine.to_b64(), history.steps, history.halted,
                   initial_tape=config["initial_tape"], max_steps=config["max_steps"])
    return history


def handle_trace(config, logger):
    console.print("\n[bold]Trace Machine[/bold]")
    machine = ask_machine()
    show_text = config["max_steps"] <= 200 or Confirm.ask(
        f"Print all {config['max_steps']:,} rows?", default=False)
    run_trace(machine, config, logger, show_text)


def handle_image(config, logger):
    console.print("\n[bold]Export Trace Image[/bold]")
    machine = ask_machine()
    image_dir = Path(config["image_directory"])
    image_dir.mkdir(parents=True, exist_ok=True)

    if Confirm.ask("Zoomed view instead of full trace?", default=False):
        width = IntPrompt.ask("View width (pixels)", default=800)
        height = IntPrompt.ask("View height (pixels)", default=600)
        zoom = FloatPrompt.ask("Zoom", default=float(config["zoom"]))
        pan_x = FloatPrompt.ask("Pan x (pixels)", default=0.0)
        pan_y = FloatPrompt.ask("Pan y (pixels)", default=0.0)
        history = run(machine, config["initial_tape"], config["max_steps"])
        transform = ViewTransform(zoom, pan_x, pan_y, config["origin_x"])
        buffer = render_view(history, transform, width, height)
        image_file = image_dir / f"{machine.to_b64()}_view.png"
    else:
        buffer = trace_to_image(machine, config["initial_tape"], config["image_width"],
                                config["image_height"], config["origin_x"], config["show_head_move"])
        image_file = image_dir / f"{machine.to_b64()}.png"

    save_png(buffer, image_file)
    logger.log({"machine": machine.to_b64(), "image": str(image_file)})
    console.print(f"[green]Image saved to {image_file}[/green]")


def handle_export():
    console.print("\n[bold]Export turingmachine.io Table[/bold]")
    machine = ask_machine()
    console.print(to_table_text(machine), highlight=False)


def handle_simulate_pool(config, logger):
    console.print("\n[bold]Simulate Machine Pool[/bold]")

    pools = sorted(Path("pools").glob("*.txt"))
    if not pools:
        console.print("[red]No pools found. Build one with tools/pool_builder.py first.[/red]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Index", justify="center")
    table.add_column("Pool Name", justify="center")
    for idx, pool_file in enumerate(pools):
        table.add_row(str(idx), pool_file.stem)
    console.print(table)

    idx_choice = IntPrompt.ask("\nChoose a pool by Index")
    if idx_choice < 0 or idx_choice >= len(pools):
        console.print("[red]Invalid choice. Exiting.[/red]")
        return

    simulate_pool(str(pools[idx_choice]), batch_size=config["batch_size"],
                  max_steps=config["max_steps"], logger=logger)
    console.print("[green]Machine pool simulation completed![/green]")


def handle_edit_config(config, path=DEFAULT_CONFIG_PATH):
    console.print("\n[bold]Edit Configuration[/bold]")

    config.update({
        "max_steps": IntPrompt.ask("Max Steps", default=config["max_steps"]),
        "initial_tape": Prompt.ask("Initial Tape", default=config["initial_tape"]),
        "image_width": IntPrompt.ask("Image Width", default=config["image_width"]),
        "image_height": IntPrompt.ask("Image Height", default=config["image_height"]),
        "origin_x": FloatPrompt.ask("Origin X (fraction of width)", default=float(config["origin_x"])),
        "show_head_move": Confirm.ask("Show head moves?", default=config["show_head_move"]),
        "zoom": FloatPrompt.ask("Zoom", default=float(config["zoom"])),
        "batch_size": IntPrompt.ask("Batch Size", default=config["batch_size"])
    })

    try:
        save_config(config, path)
        console.print("[green]Configuration updated successfully.[/green]")
    except (TypeError, ValueError) as e:
        console.print(f"[red]Configuration not saved: {e}[/red]")


def interactive_main(config_path=DEFAULT_CONFIG_PATH):
    config = load_runtime_config(config_path)
    logger = make_logger(config)

    while True:
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4", "5", "6", "7"], default="7")

        if choice == "1":
            handle_inspect()
        elif choice == "2":
            handle_trace(config, logger)
        elif choice == "3":
            handle_image(config, logger)
        elif choice == "4":
            handle_export()
        elif choice == "5":
            handle_simulate_pool(config, logger)
        elif choice == "6":
            handle_edit_config(config, config_path)
            config = load_runtime_config(config_path)
        elif choice == "7":
            console.print("[bold green]Goodbye![/bold green]")
            break

# === CLI Mode for Automation ===
def cli_main(args):
    config = load_runtime_config(args.config)
    if args.max_steps is not None:
        config["max_steps"] = args.max_steps
    logger = make_logger(config)

    if args.pool:
        simulate_pool(args.pool, batch_size=config["batch_size"], max_steps=config["max_steps"], logger=logger)
    if not args.machine:
        return

    machine = load_machine(args.machine)
    if not (args.export or args.trace or args.image):
        args.trace = True
    if args.export:
        print(to_table_text(machine), end="")
    if args.trace:
        run_trace(machine, config, logger)
    if args.image:
        buffer = trace_to_image(machine, config["initial_tape"], config["image_width"],
                                config["image_height"], config["origin_x"], config["show_head_move"])
        save_png(buffer, args.image)
        console.print(f"[green]Image saved to {args.image}[/green]")

def main(argv=None):
    parser = argparse.ArgumentParser(description="Busy Beaver Trace Application")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Runtime config JSON")
    parser.add_argument("--machine", help="Encoded machine (m...) or standard text")
    parser.add_argument("--trace", action="store_true", help="Print the execution trace")
    parser.add_argument("--image", help="Write the trace image to this PNG path")
    parser.add_argument("--export", action="store_true", help="Print the turingmachine.io table")
    parser.add_argument("--pool", help="Simulate every machine in this pool file")
    parser.add_argument("--max_steps", type=int, help="Override max_steps from the config")
    args = parser.parse_args(argv)

    if args.machine or args.pool:
        cli_main(args)
    else:
        interactive_main(args.config)

if __name__ == "__main__":
    main()

import argparse

from simulator.database import read_machine
from simulator.export import from_standard_text, to_standard_text, to_table_text
from simulator.turing_machine import HALT, TuringMachine, state_letter


def load_machine(text):
    """Accept either an 'm'-prefixed encoding or the standard '1RB1LB_1LA---' form."""
    if text.startswith("m"):
        return TuringMachine.from_b64(text)
    return from_standard_text(text)


def format_transition(write_symbol, move, next_state):
    if next_state is HALT:
        return "HALT"
    return f"{write_symbol}{'RL'[move]}{state_letter(next_state)}"


def pretty_print_machine(machine):
    """Pretty print the machine in a state x symbol table with clean Busy Beaver notation."""
    # === Terminal Human-Readable Table ===
    print("\n=== Transition Table ===")
    print("\t".join([" ", "0", "1"]))

    transition_table = []
    for state in range(machine.num_states):
        letter = state_letter(state)
        row = [f"State {letter}"]
        latex_row = [letter]
        for symbol in (0, 1):
            action = format_transition(*machine.transition(state, symbol))
            row.append(action)
            latex_row.append(action)
        print("\t".join(row))
        transition_table.append(latex_row)

    # === LaTeX Table Output ===
    print("\n=== LaTeX Table ===")
    print(r"\begin{array}{c|cc}")
    print(r"State/Symbol & \text{0} & \text{1} \\ \hline")
    for latex_row in transition_table:
        print(" & ".join(latex_row) + r" \\")
    print(r"\end{array}")

    print("\n=== turingmachine.io ===")
    print(to_table_text(machine), end="")


def main():
    parser = argparse.ArgumentParser(description="Busy Beaver Machine Inspector")
    parser.add_argument("--machine", help="Encoded machine (m...) or standard text (1RB1LB_1LA---)")
    parser.add_argument("--db", help="Seed database file to read the machine from")
    parser.add_argument("--index", type=int, help="Machine index inside --db")
    args = parser.parse_args()

    if args.machine:
        machine = load_machine(args.machine)
    elif args.db and args.index is not None:
        machine = read_machine(args.db, args.index)
        print(f"[INFO] Machine #{args.index:,} of {args.db}")
    else:
        raise ValueError("You must specify either --machine or --db with --index.")

    print(f"  Encoded: {machine.to_b64()}")
    print(f"  Standard: {to_standard_text(machine)}")
    print(f"  States: {machine.num_states}")
    pretty_print_machine(machine)

if __name__ == "__main__":
    main()

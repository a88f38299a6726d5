#!/usr/bin/env python3
"""
Demo script for BoxFlow.

Walks through flowing a debate round: typing into boxes, arrowing
between columns, crossing out answered arguments and undoing mistakes.
"""

import logging
import sys

from boxflow import DEBATE_STYLES, FlowEditor, FlowRenderer


def print_header(title):
    """Print a formatted header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70 + "\n")


def demo_1():
    """Demo 1: Flowing an affirmative case"""
    print_header("Demo 1: Flowing the 1AC and the 1NC answers")

    editor = FlowEditor()
    aff = editor.new_flow("policy")
    renderer = FlowRenderer(max_text_width=14)

    editor.apply_edit(aff, [0], {"content": "Inherency: status quo fails"})
    aff, focus = editor.navigate(aff, [0], "down")
    editor.apply_edit(aff, focus, {"content": "Adv 1: warming"})
    aff, focus = editor.navigate(aff, focus, "right")
    editor.apply_edit(aff, focus, {"content": "No impact"})
    aff, focus = editor.navigate(aff, focus, "down")
    editor.apply_edit(aff, focus, {"content": "Alt cause: China"})

    print(renderer.render(aff))


def demo_2():
    """Demo 2: Undo and redo"""
    print_header("Demo 2: Undo and Redo")

    editor = FlowEditor()
    doc = editor.create_document(["AC", "NC"], title="Aff")
    renderer = FlowRenderer(max_text_width=12)

    doc, focus = editor.navigate(doc, [0], "right")
    editor.apply_edit(doc, focus, {"content": "block"})
    print("After moving right and typing:")
    print(renderer.render(doc))

    editor.undo(doc)
    print("\nUndo (the box stays, its text goes):")
    print(renderer.render(doc))

    editor.undo(doc)
    print("\nUndo again (the box goes):")
    print(renderer.render(doc))

    editor.redo(doc)
    editor.redo(doc)
    print("\nRedo twice:")
    print(renderer.render(doc))


def demo_3():
    """Demo 3: Crossing out and starting in a later column"""
    print_header("Demo 3: Crossed-out Boxes and Column Heads")

    editor = FlowEditor()
    doc = editor.create_document(["1NC", "2AC", "2NC"], title="Off: T")
    renderer = FlowRenderer(max_text_width=12)

    editor.apply_edit(doc, [0], {"content": "Interp: must defend the rez"})
    doc, focus = editor.navigate(doc, [0], "right")
    editor.apply_edit(doc, focus, {"content": "We meet"})
    editor.toggle_cross(doc, focus)

    # The 2NC reads something new that starts in its own column
    editor.add_column_box(doc, 2)
    editor.apply_edit(doc, doc.last_focus, {"content": "Limits DA"})

    print(renderer.render(doc))


def demo_4():
    """Demo 4: Debate styles"""
    print_header("Demo 4: Debate Style Presets")

    for name, style in DEBATE_STYLES.items():
        print(f"{name}:")
        print(f"  {style.primary.name:<6} {' | '.join(style.primary.columns)}")
        if style.secondary is not None:
            print(f"  {style.secondary.name:<6} {' | '.join(style.secondary.columns)}")


def interactive_mode():
    """Interactive mode: edit a flow from the keyboard."""
    print_header("Interactive Mode")

    print("Commands: up, down, left, right, type <text>, cross, delete,")
    print("          undo, redo, quit")
    print()

    editor = FlowEditor()
    doc = editor.new_flow("lincolnDouglas")
    renderer = FlowRenderer(max_text_width=14)
    focus = [0]
    doc = editor.focus(doc, focus)

    while True:
        print(renderer.render(doc))
        print(f"\nfocus: {focus}")
        try:
            line = input("> ").strip()
        except EOFError:
            break

        command, _, argument = line.partition(" ")
        if command == "quit":
            break
        if command in ("up", "down", "left", "right"):
            doc, focus = editor.navigate(doc, focus, command)
        elif command == "type":
            editor.apply_edit(doc, focus, {"content": argument})
        elif command == "cross":
            editor.toggle_cross(doc, focus)
        elif command == "delete":
            editor.delete_box(doc, focus)
            focus = doc.last_focus or [0]
        elif command in ("undo", "redo"):
            result = getattr(editor, command)(doc)
            if result is None:
                print(f"Nothing to {command}.")
            else:
                focus = doc.last_focus or [0]
        else:
            print(f"Unknown command: {command}")


def main():
    """Main demo function."""
    demos = [
        ("Flowing a Case", demo_1),
        ("Undo and Redo", demo_2),
        ("Crossing Out", demo_3),
        ("Debate Styles", demo_4),
    ]

    print("\n" + "=" * 70)
    print("  BOXFLOW - DEMONSTRATION")
    print("=" * 70)
    print("\nPress Enter after each demo to continue...")

    for _, demo_func in demos:
        input("\n[Press Enter to continue]")
        demo_func()

    response = input("\nWould you like to try interactive mode? (y/n): ")
    if response.lower().startswith("y"):
        interactive_mode()

    print("\n" + "=" * 70)
    print("  Thank you for trying BoxFlow!")
    print("=" * 70)


if __name__ == "__main__":
    if "-v" in sys.argv:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nDemo interrupted. Goodbye!")
        sys.exit(0)

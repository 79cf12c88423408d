#!/usr/bin/env python3
"""Example: Quickstart — modelkit

Declare mutable and immutable models, merge updates into nested models,
clone them, and take frozen snapshots.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install modelkit
"""
from __future__ import annotations

import modelkit
from modelkit import ImmutableModel, ModelRef, MutableModel, Prop, ReadOnlyViolation


class Point(MutableModel):
    x = Prop()
    y = Prop()


class Line(MutableModel):
    start = ModelRef(Point)
    end = ModelRef(Point)
    style = Prop()


class Drawing(ImmutableModel):
    title = Prop()
    line = ModelRef(Line)


def main() -> None:
    print(f"modelkit version: {modelkit.__version__}")

    # Step 1: Build a mutable model tree from plain data
    line = Line({"start": {"x": 0, "y": 0}, "end": {"x": 1, "y": 1}, "style": {"width": 2}})
    print(f"Built: {line!r}")

    # Step 2: Merge update; the nested Point keeps its identity
    end = line.end
    line.set({"end": {"x": 5, "y": 5}})
    print(f"After merge: end={line.end!r}, same object: {line.end is end}")

    # Step 3: Shallow vs deep clone
    shallow = line.clone()
    deep = line.clone(deep=True)
    print(f"Shallow shares end: {shallow.end is line.end}")
    print(f"Deep shares end:    {deep.end is line.end}")

    # Step 4: Embed in an immutable model (isolated and frozen)
    drawing = Drawing({"title": "sketch", "line": line})
    line.set({"start": {"x": 100}})
    print(f"Drawing keeps its own copy: start.x={drawing.line.start.x}")
    try:
        drawing.line.style["width"] = 10
    except ReadOnlyViolation as exc:
        print(f"Rejected write: {exc}")

    # Step 5: Freeze the live line; further set() calls are ignored
    line.freeze()
    line.set({"end": {"x": 0}})
    print(f"Frozen: {line.is_frozen()}, end.x still {line.end.x}")


if __name__ == "__main__":
    main()

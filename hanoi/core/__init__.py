"""Puzzle primitives: pegs, the engine, the line grammar and board rendering.

Nothing here touches the terminal; the session and CLI sit on top.
"""

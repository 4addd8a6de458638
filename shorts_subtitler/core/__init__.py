"""Core loading, intermediate representation and pipeline modules.

WHY: The core package holds the stable heart of the subtitle step: the IR
dataclasses, the loaders that build them from collaborator files, and the
pipeline that turns them into a CaptionTrack for the formatters.

HOW: ir.py defines the data structures, loader.py reads narration scripts
and saved transcriptions, pipeline.py runs the caption chunker.

RULES:
- IR dataclasses are the contract; change with care
- No formatter-specific logic here
"""

"""
AI Dice Roller - dice-rolling function tool for LLM agents.

This package parses "NdM+K" dice formulas, rolls them, and exposes the
capability to a host agent runtime as a registrable function tool.
"""

__version__ = "0.1.0"

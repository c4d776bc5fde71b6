"""
Tool Integration Layer.

Exposes the dice formula engine to LLM agents as a function tool that a
host runtime registers and invokes on the agent's behalf.
"""

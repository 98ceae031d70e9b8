"""
Agent-callable CRM tools.

The registry maps tool names to input models and handlers and runs them
behind a boundary that always returns a result envelope.
"""

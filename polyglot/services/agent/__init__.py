"""Agent services.

Use explicit imports:
    from polyglot.services.agent.core import ChatPipeline
"""

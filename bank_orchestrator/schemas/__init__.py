"""
Schemas for the orchestrator
"""

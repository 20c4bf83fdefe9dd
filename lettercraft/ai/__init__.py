"""
AI Module - LLM provider, prompts and monitoring for the letter gateway.
"""

"""Prompt templates for the storyboard assistant."""

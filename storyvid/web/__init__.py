"""Web interface for StoryVid."""

"""StoryVid: AI-assisted storyboard and video render backend."""

__version__ = "0.1.0"

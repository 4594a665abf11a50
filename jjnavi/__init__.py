"""Shell integration, diagnostic report types and output rendering for Jujutsu workspaces."""

__version__ = "0.2.0"
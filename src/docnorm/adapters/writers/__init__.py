"""Document writer adapters."""

from .filesystem import FilesystemWriter, render_html

__all__ = ["FilesystemWriter", "render_html"]

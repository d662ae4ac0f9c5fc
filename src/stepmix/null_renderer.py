"""
NullRenderer - renders as fast as possible with no output.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from stepmix.renderer import Renderer
from stepmix.snippet import Snippet


class NullRenderer(Renderer):
    """
    A renderer that discards its output.

    Drives side-effect PEs such as WavWriterPE for offline export, and lets
    tests render a graph without an audio device.

    Example:
        >>> renderer = NullRenderer()
        >>> renderer.set_source(WavWriterPE(mix, "out.wav"))
        >>> renderer.start()
        >>> renderer.render(0, 88200)
        >>> renderer.stop()
    """

    def _output(self, snippet: Snippet) -> None:
        pass

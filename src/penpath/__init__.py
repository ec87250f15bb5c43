"""penpath - Interactive Bezier path editing engine.

penpath is the geometry and interaction core of a whiteboard pen tool. It
turns raw pointer and keyboard input into a multi-segment Bezier path that
can be created, reshaped, subdivided and closed, and hands the result back
to a host renderer as a point model, a bounding box and an SVG path string.

Example:
    $ penpath replay session.json

This replays a recorded event script through the pen tool and prints the
resulting shape and its path data.
"""

__version__ = "0.1.0"
__author__ = "penpath contributors"

__all__ = ["__author__", "__version__"]

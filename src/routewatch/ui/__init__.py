"""Terminal views: render/input loops, layout, keyboard and drawing surface."""

"""Report rendering: layout engine, drawing surface and PDF export."""

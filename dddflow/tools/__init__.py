"""Command-line tools for dddflow projects."""

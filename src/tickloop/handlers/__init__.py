"""Handler bodies (payload -> result text) used by the CLI. None of them raise."""

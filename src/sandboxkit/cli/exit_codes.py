"""Exit codes for the sandboxkit CLI."""

EXIT_SUCCESS = 0
EXIT_CHECK_FAILED = 1
EXIT_INVALID_USAGE = 3

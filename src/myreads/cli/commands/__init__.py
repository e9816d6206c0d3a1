# ABOUTME: Click subcommands for the MyReads CLI, one module per command.
# ABOUTME: Registered on the root group in myreads.cli.

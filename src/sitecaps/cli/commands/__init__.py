"""CLI subcommands. Importing a module registers its commands with the app."""

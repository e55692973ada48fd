"""Cyclopts application and command routing for the sellercsv CLI.

The CLI provides the following commands:
- validate: Validate a CSV report against a registered schema
- process: Batch-process a CSV report, tolerating bad rows
- inspect: Display headers, row count and matching schemas
- list-schemas: List registered schemas
- describe-schema: Show the columns of a schema
- check-config: Validate configuration files
"""

from cyclopts import App

from sellercsv.cli import commands

app = App(
    name="sellercsv",
    help="Schema validation for Amazon seller CSV reports",
    version="0.1.0",
)

app.command(commands.validate)
app.command(commands.process)
app.command(commands.inspect)
app.command(commands.list_schemas, name="list-schemas")
app.command(commands.describe_schema, name="describe-schema")
app.command(commands.check_config, name="check-config")

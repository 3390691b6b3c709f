"""videoboard: groups and videos over a JSON file or a SQL database."""

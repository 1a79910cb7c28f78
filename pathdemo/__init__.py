"""Path discretization and lookahead pursuit simulation."""

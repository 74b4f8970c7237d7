"""HTTP API for the Ballot Box application."""

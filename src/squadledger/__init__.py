"""Track soccer teams, players, payments and per-team balances."""

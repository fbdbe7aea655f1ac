"""Admin edge functions for the wallet platform (settings, transactions, support, cards)."""

"""Business logic: ledger aggregation, settlement and the write paths around them."""

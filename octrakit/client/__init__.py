# Ledger client

# Routes package init
"""
Transaction Ledger Backend — API Routes Package
================================================

Route Inventory:
    - transactions.py:       /transactions/...       (session cookie required)
    - transaction_types.py:  /transactions-type/...  (cookie required unless
                                                      disabled in settings)
    - health.py:             GET /health

Routes are thin: they pull the path id and raw body out of the request,
call the service, and wrap the result in the response envelope. Every
failure is an exception rendered by the handlers in main.py.
"""

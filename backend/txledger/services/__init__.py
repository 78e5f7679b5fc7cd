# Services package init
"""
Transaction Ledger Backend — Services Layer
============================================

Service Inventory:
    - validation:                PayloadValidator, violation mapping
    - store:                     EntityStore (CRUD over one ORM model)
    - integrity:                 referential check for transaction writes
    - formatting:                display names and response payloads
    - transaction_type_service:  TransactionTypeService orchestration
    - transaction_service:       TransactionService orchestration
"""

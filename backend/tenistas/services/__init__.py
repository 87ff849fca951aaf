"""
Tenistas API — Services Layer
===============================

What:  Orchestration between routes (HTTP) and repositories (storage).

Service Inventory:
    - RaquetasService: delegation to a RaquetasRepository plus
      absent → NotFoundError translation for id-addressed operations
"""

# Routes package init
"""
ProductHub Backend — API Routes Package
=========================================

Route Inventory:
    - health.py:      GET  /                          (liveness, connects MongoDB)
    - products.py:    /products, /products/{id}, /products/user/{uid},
                      /products/toggle/{id}
    - users.py:       GET/POST /users
    - ratings.py:     GET /ratings/product/{id}, POST /ratings
    - categories.py:  /categories, /categories/{id}
    - cart.py:        GET /cart/{uid}, POST /cart/add
    - dashboard.py:   GET /store-dashboard/{uid}
    - fallback.py:    guarded() and the default payloads of each route

Design Principle:
    Routes are THIN: pull path params and body, call one service method
    through guarded(), return its response. No try/except in handlers.
"""

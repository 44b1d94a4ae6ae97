# Services package init
"""
ProductHub Backend — Services Layer
=====================================

What:  All MongoDB access. Routes never touch a collection directly.
How:   Each service is a stateless singleton; the MongoStore is passed in on
       every call. Methods return JSON-ready values or raise ProductHubError.

Service Inventory:
    - ProductService:    products CRUD, per-seller listing, stock toggle, counts
    - UserService:       users insert/list
    - RatingService:     ratings insert, list by product / by seller
    - CategoryService:   categories CRUD
    - CartService:       cart read and add-to-cart
    - DashboardService:  seller aggregate (products count + ratings)
    - health_service:    liveness check
"""

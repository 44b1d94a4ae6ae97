"""
ProductHub Backend — Seller Dashboard Service
===============================================

What:  Aggregates a seller's product count and received ratings.
How:   One count on products, one find on ratings. Orders and earnings are
       not tracked anywhere, so totalOrders and totalEarnings stay 0.
"""

from app.database import MongoStore
from app.schemas.responses import DashboardResponse
from app.services.product_service import product_service
from app.services.rating_service import rating_service


class DashboardService:

    async def get_dashboard(self, store: MongoStore, seller_id: str) -> DashboardResponse:
        total_products = await product_service.count_user_products(store, seller_id)
        ratings = await rating_service.list_seller_ratings(store, seller_id)
        return DashboardResponse(
            totalProducts=total_products,
            totalOrders=0,
            totalEarnings=0,
            ratings=ratings,
        )


dashboard_service = DashboardService()

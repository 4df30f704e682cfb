from app.economy.prizes import PrizeService

__all__ = ["PrizeService"]

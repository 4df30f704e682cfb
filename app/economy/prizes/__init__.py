from app.economy.prizes.service import PrizeService

__all__ = ["PrizeService"]

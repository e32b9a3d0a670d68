from .board_service import KitchenBoardService

__all__ = ['KitchenBoardService']

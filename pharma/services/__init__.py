from pharma.services.medicine_search_service import MedicineFilters, MedicineSearchService
from pharma.services.order_service import OrderService

__all__ = ['MedicineFilters', 'MedicineSearchService', 'OrderService']

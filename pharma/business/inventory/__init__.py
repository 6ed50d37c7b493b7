from pharma.business.inventory.medicine_manager import MedicineFormData, MedicineManager
from pharma.business.inventory.supplier_manager import SupplierManager

__all__ = ['MedicineFormData', 'MedicineManager', 'SupplierManager']

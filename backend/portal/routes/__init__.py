"""
Institute Portal Backend: API Routes Package
=============================================

Route Inventory:
    - products.py:         /api/products, /api/admin/products
    - service_centers.py:  /api/service-centers, /api/admin/service-centers
    - services.py:         /api/services
    - staff.py:            /api/departments/{id}/staff, /api/laboratories/{id}/staff
    - health.py:           /health

Routes stay thin: resolve the locale, call the service singleton, wrap the
result in its response envelope. Business rules live in `portal.services`.
"""

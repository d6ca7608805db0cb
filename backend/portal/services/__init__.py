"""
Institute Portal Backend: Services Layer
=========================================

What:  Business logic between routes (HTTP) and the database.
How:   Each service loads ORM rows, converts them to plain mappings with
       `to_dict()` and runs them through the pure transforms in
       `portal.transforms`. Services raise PortalError subclasses; routes
       never inspect rows themselves.

Service Inventory:
    - ProductService: product listing, lookup and admin writes
    - ServiceCenterService: service centers and their equipment
    - CatalogService: catalogue services with equipment and center heads
    - StaffService: department and laboratory staff listings

Each module exposes a stateless singleton (`product_service`, ...) that
tests patch at the route module.
"""

# geopath/planning/__init__.py

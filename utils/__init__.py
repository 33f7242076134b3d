# Utility modules for the recipe importer
from .url_validator import validate_import_url, is_private_ip, InvalidInput
from .sanitizer import clean_text, clean_recipe_name, clean_source_url

"""
Importer Constants

Request signature for page fetches and the classified network fault reasons.
"""

# Request signature sent with every page fetch
IMPORT_USER_AGENT = 'Mozilla/5.0 (compatible; RecipeImporter/1.0)'
IMPORT_ACCEPT = 'text/html,application/xhtml+xml'

# Fetch budget
IMPORT_TIMEOUT = 15                        # seconds, whole request
IMPORT_MAX_REDIRECTS = 5
IMPORT_MAX_RESPONSE_SIZE = 10 * 1024 * 1024  # 10MB

# NetworkFault reasons
FAULT_CONNECTION_REFUSED = 'connection_refused'
FAULT_DNS_FAILURE = 'dns_failure'
FAULT_CONNECTION_RESET = 'connection_reset'
FAULT_TIMEOUT = 'timeout'
FAULT_HOST_UNREACHABLE = 'host_unreachable'
FAULT_TLS_ERROR = 'tls_error'

# Class-name patterns used by the heuristic extractor
TITLE_CLASS_PATTERNS = ('recipe-title', 'recipe__title')
INGREDIENT_CLASS_PATTERNS = ('ingredient',)
STEP_CLASS_PATTERNS = ('instruction', 'step', 'direction')

from flask import Flask, request, jsonify
import logging
from functools import partial

from config import get_config
from constants import FAULT_TLS_ERROR
from services import (
    import_from_url,
    NetworkFault,
    OriginHttpFault,
    UnknownFetchFault,
)
from utils import validate_import_url, InvalidInput

app = Flask(__name__)
app.config.from_object(get_config())

logging.basicConfig(
    level=app.config['LOG_LEVEL'],
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)


# ============================================
# IMPORT ERRORS
# ============================================

def describe_import_fault(fault):
    """Map an import fault to (kind, user-facing message)."""
    if isinstance(fault, NetworkFault):
        if fault.reason == FAULT_TLS_ERROR:
            return 'network', 'SSL certificate error when connecting to the URL.'
        return 'network', 'Could not reach the URL. Check that it is publicly accessible and try again.'
    if isinstance(fault, OriginHttpFault):
        return 'origin_http', (
            f'The website returned an error (HTTP {fault.status}). '
            'It may be blocking automated requests.'
        )
    return 'unknown', 'Could not fetch the URL. Check that it is accessible.'


# ============================================
# ROUTES - IMPORT
# ============================================

@app.route('/health')
def health():
    return jsonify({'status': 'ok'})


@app.route('/recipe/import', methods=['POST'])
def recipe_import():
    data = request.get_json(silent=True) or {}
    url = data.get('url') if isinstance(data, dict) else None
    if url is None:
        url = request.form.get('url', '')

    block_private = app.config['IMPORT_BLOCK_PRIVATE_HOSTS']
    try:
        url = validate_import_url(url, block_private=block_private)
    except InvalidInput as e:
        return jsonify({'error': str(e)}), 400

    # Redirect targets get the same private-host check as the submitted URL
    redirect_check = partial(validate_import_url, block_private=True) if block_private else None

    try:
        recipe = import_from_url(
            url,
            timeout=app.config['IMPORT_TIMEOUT'],
            max_redirects=app.config['IMPORT_MAX_REDIRECTS'],
            max_size=app.config['IMPORT_MAX_RESPONSE_SIZE'],
            user_agent=app.config['IMPORT_USER_AGENT'],
            redirect_check=redirect_check,
        )
    except InvalidInput as e:
        logger.warning("Import of %s refused a redirect: %s", url, e)
        return jsonify({'error': str(e)}), 400
    except (NetworkFault, OriginHttpFault, UnknownFetchFault) as e:
        kind, message = describe_import_fault(e)
        logger.info("Import of %s failed (%s): %s", url, kind, e)
        return jsonify({'error': message, 'kind': kind}), 422

    return jsonify({'recipe': recipe.to_dict()})


if __name__ == '__main__':
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)

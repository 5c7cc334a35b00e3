from flask import Flask, jsonify, request
from loguru import logger

from poolpass.charsets import Category, parse_categories
from poolpass.evaluator import evaluate
from poolpass.generator import (
    DEFAULT_LENGTH,
    EmptyPoolError,
    GeneratorConfig,
    RandomSourceUnavailable,
    generate_password,
)

app = Flask(__name__)

def _json_body():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")
    return data

_FLAGS = (
    ('upper', Category.UPPERCASE),
    ('lower', Category.LOWERCASE),
    ('digits', Category.NUMBERS),
    ('symbols', Category.SYMBOLS),
)

@app.errorhandler(EmptyPoolError)
@app.errorhandler(ValueError)
def bad_request(e):
    logger.info("Rejected request: {}", e)
    return jsonify({'error': str(e)}), 400

@app.errorhandler(RandomSourceUnavailable)
def source_unavailable(e):
    logger.error("Random source failure: {}", e)
    return jsonify({'error': str(e)}), 503

@app.route('/')
def home():
    return jsonify({
        "message": "PoolPass API is running"
    })

@app.route('/generate', methods=['POST'])
def generate_route():
    data = _json_body()
    enabled = Category(0)
    for key, category in _FLAGS:
        if bool(data.get(key, True)):
            enabled |= category
    config = GeneratorConfig(
        categories=enabled,
        exclude_ambiguous=bool(data.get('exclude_ambiguous', False)),
        length=data.get('length', DEFAULT_LENGTH),
    )
    password = generate_password(config, unbiased=bool(data.get('unbiased', False)))
    result = evaluate(password, enabled)
    return jsonify({'password': password, 'score': result['score'], 'label': result['label']})

@app.route('/score', methods=['POST'])
def score_route():
    data = _json_body()
    password = data.get('password', '')
    if not isinstance(password, str):
        raise ValueError("password must be a string")
    names = data.get('categories')
    categories = Category.ALL if names is None else parse_categories(names)
    return jsonify(evaluate(password, categories))

if __name__ == "__main__":
    app.run(debug=True)

# api/app.py - Flask API over the article corpus and the assistant
"""
Routes:
  GET  /api/articles          summary list of all articles
  GET  /api/articles?id=N     full article N
  POST /api/chat              {"message": "..."} -> assistant reply
"""

from flask import Flask, request, jsonify
from flask_cors import CORS
from econstitucional.exceptions import ModelServiceError
from econstitucional.retrieval.corpus import thaw
from econstitucional.utils.logger import logger


def create_app(corpus, assistant=None, cors_origins="*") -> Flask:
  """Build the Flask app around an already loaded corpus"""
  app = Flask(__name__)
  CORS(app, origins = cors_origins)

  app.config['CORPUS'] = corpus
  app.config['ASSISTANT'] = assistant

  @app.route('/api/articles', methods=['GET'])
  def articles():
    if not corpus.available:
      return jsonify({'error': 'Articles data not available'}), 503

    article_id = request.args.get('id')

    # Single article with full details
    if article_id is not None:
      try:
        article_id = int(article_id)
      except ValueError:
        return jsonify({'error': 'Invalid article id'}), 400

      article = corpus.get(article_id)
      if article is None:
        return jsonify({'error': 'Article not found'}), 404
      return jsonify(thaw(article)), 200

    summaries = [thaw(s) for s in corpus.summaries]
    return jsonify({'total': len(summaries), 'articulos': summaries}), 200

  @app.route('/api/chat', methods=['POST'])
  def chat():
    data = request.get_json(silent = True) or {}
    message = data.get('message')

    if not message or not isinstance(message, str) or not message.strip():
      return jsonify({'error': 'Message is required'}), 400

    if assistant is None:
      return jsonify({'error': 'API key not configured'}), 500

    try:
      result = assistant.ask(message)
    except ModelServiceError as e:
      return jsonify({'error': 'Error from AI service', 'upstreamStatus': e.status_code}), 502

    return jsonify(result), 200

  @app.errorhandler(405)
  def method_not_allowed(e):
    return jsonify({'error': 'Method not allowed'}), 405

  @app.errorhandler(500)
  def internal_error(e):
    logger.error(f"✗ Error interno: {e}")
    return jsonify({'error': 'Internal server error'}), 500

  return app

from flask import Blueprint, jsonify, request

from src.services import file_service


files_bp = Blueprint("files", __name__, url_prefix="/api")


@files_bp.route("/upload", methods=["POST"])
def upload_files():
    """
    Multipart upload of radiographs / reports (form field ``files``).
    The returned filenames are what medical records store in ``files``.
    """
    stored = file_service.save_uploads(request.files.getlist("files"))
    return jsonify({"message": "Files uploaded successfully", "files": stored})


@files_bp.route("/files/<path:filename>", methods=["GET"])
def serve_file(filename: str):
    return file_service.send_stored_file(filename)

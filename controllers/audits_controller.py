from flask import Blueprint, request, send_file

from controllers.common import list_response, require
from models.audit_log import AuditLog
from schemas.access import AuditCodeRequest
from utils import messages
from utils.auth import permission_required
from utils.exports import MIMETYPES, WRITERS, audit_rows
from utils.helpers import get_json_body, get_list_params, utc_now
from utils.permissions import VIEW_AUDIT
from utils.responses import ApiError, handle_success, STATUS_CODE_BAD_REQUEST

audits_bp = Blueprint("audits", __name__, url_prefix="/audits")


# View Audit Log
@audits_bp.route("/GetAudits", methods=["GET"])
@permission_required(VIEW_AUDIT)
def get_audits():
    return list_response(AuditLog, messages.AUDIT)


# View Audit Entry
@audits_bp.route("/GetAuditByCode", methods=["POST"])
@permission_required(VIEW_AUDIT)
def get_audit_by_code():
    body = AuditCodeRequest.model_validate(get_json_body())
    audit = require(AuditLog.find_details({"auditCode": body.auditCode}), messages.AUDIT.not_found)
    return handle_success(messages.AUDIT.get_one, audit)


# ---------------- Export CSV / Excel / PDF ----------------
@audits_bp.route("/ExportAudits", methods=["GET"])
@permission_required(VIEW_AUDIT)
def export_audits():
    export_format = (request.args.get("format") or "csv").lower()
    if export_format not in WRITERS:
        raise ApiError(STATUS_CODE_BAD_REQUEST, messages.MESSAGE_EXPORT_FORMAT_NOT_SUPPORTED)

    params = get_list_params()
    params["all_results"] = True
    audits, _ = AuditLog.find_many(**params)

    output = WRITERS[export_format](audit_rows(audits))
    download_name = f"audit-log-{utc_now():%Y%m%d-%H%M%S}.{export_format}"
    return send_file(output, mimetype=MIMETYPES[export_format],
                     as_attachment=True, download_name=download_name)

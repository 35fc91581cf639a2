from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payments", methods=["GET"], endpoint="list_payments")
    def list_payments():
        return jsonify([p.to_dict() for p in container.membership_service.list_payments()])

    @app.route("/api/payments", methods=["POST"], endpoint="record_payment")
    def record_payment():
        data = request.get_json(silent=True) or {}
        payment = container.membership_service.record_payment(
            data.get("member_id"),
            data.get("amount"),
            data.get("plan_id"),
        )
        return jsonify(
            {
                "id": payment.payment_id,
                "member_id": payment.member_id,
                "amount": str(payment.amount),
                "expiry_date": payment.expiry_date.isoformat(),
                "message": "Payment recorded successfully",
            }
        ), 201

    @app.route("/api/reports/revenue", methods=["GET"], endpoint="revenue_report")
    def revenue_report():
        report = container.membership_service.revenue_report(plan_id=request.args.get("plan_id"))
        return jsonify(report.to_dict())

from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members", methods=["GET"], endpoint="list_members")
    def list_members():
        return jsonify([m.to_dict() for m in container.member_service.list_members()])

    @app.route("/api/members/<int:member_id>", methods=["GET"], endpoint="get_member")
    def get_member(member_id: int):
        return jsonify(container.member_service.get_member(member_id).to_dict())

    @app.route("/api/members", methods=["POST"], endpoint="register_member")
    def register_member():
        data = request.get_json(silent=True) or {}
        member = container.member_service.register(
            name=data.get("name"),
            email=data.get("email"),
            phone=data.get("phone"),
            plan_id=data.get("membership_plan_id"),
        )
        return jsonify(
            {
                "id": member.member_id,
                "name": member.name,
                "email": member.email,
                "message": "Member registered successfully",
            }
        ), 201

    @app.route("/api/members/<int:member_id>", methods=["PUT"], endpoint="update_member")
    def update_member(member_id: int):
        data = request.get_json(silent=True) or {}
        container.member_service.update(
            member_id,
            name=data.get("name"),
            email=data.get("email"),
            phone=data.get("phone"),
            status=data.get("status"),
        )
        return jsonify({"message": "Member updated successfully"})

    @app.route("/api/members/<int:member_id>", methods=["DELETE"], endpoint="delete_member")
    def delete_member(member_id: int):
        container.member_service.delete(member_id)
        return jsonify({"message": "Member deleted successfully"})

    @app.route("/api/members/<int:member_id>/subscription", methods=["GET"], endpoint="member_subscription")
    def member_subscription(member_id: int):
        status = container.membership_service.subscription_status(member_id)
        return jsonify(status.to_dict())

"""
Serializers for the projects app.

Read serializers expose projects with their derived `days_left`, the
creator summary, reward tiers and updates.  `ProjectWriteSerializer`
backs the admin create/update endpoints: it accepts `days_left` (the
campaign length in days) and an optional `rewards` list that is synced
by id on update.
"""
from __future__ import annotations

from datetime import timedelta

from django.db import transaction
from django.utils import timezone
from rest_framework import serializers

from users.serializers import UserMiniSerializer
from .models import Project, ProjectUpdate, Reward


class RewardSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(required=False)

    class Meta:
        model = Reward
        fields = ["id", "title", "description", "amount", "delivery", "backers"]
        read_only_fields = ["backers"]
        extra_kwargs = {"amount": {"min_value": 0}}


class ProjectUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProjectUpdate
        fields = ["id", "title", "content", "type", "image", "video_url", "created_at"]
        read_only_fields = ["id", "created_at"]


class ProjectListSerializer(serializers.ModelSerializer):
    creator = UserMiniSerializer(read_only=True)
    days_left = serializers.IntegerField(read_only=True)

    class Meta:
        model = Project
        fields = [
            "id", "title", "description", "category", "image",
            "goal", "raised", "backers", "days_left", "end_date",
            "status", "verified", "featured", "creator", "created_at",
        ]
        read_only_fields = fields


class ProjectDetailSerializer(ProjectListSerializer):
    rewards = RewardSerializer(many=True, read_only=True)
    updates = ProjectUpdateSerializer(many=True, read_only=True)

    class Meta(ProjectListSerializer.Meta):
        fields = ProjectListSerializer.Meta.fields + [
            "long_description", "rewards", "updates", "updated_at",
        ]
        read_only_fields = fields


class ProjectSummarySerializer(serializers.ModelSerializer):
    """Project fields embedded in payment listings."""

    class Meta:
        model = Project
        fields = ["id", "title", "description", "image", "category", "goal", "raised", "status"]
        read_only_fields = fields


class ProjectWriteSerializer(serializers.ModelSerializer):
    days_left = serializers.IntegerField(source="duration_days", min_value=1)
    rewards = RewardSerializer(many=True, required=False)

    class Meta:
        model = Project
        fields = [
            "id", "title", "description", "long_description", "category", "image",
            "goal", "days_left", "status", "verified", "featured", "rewards",
        ]
        read_only_fields = ["id"]
        extra_kwargs = {"goal": {"min_value": 1}}

    @transaction.atomic
    def create(self, validated_data):
        rewards = validated_data.pop("rewards", [])
        project = Project.objects.create(**validated_data)
        for reward in rewards:
            reward.pop("id", None)
            Reward.objects.create(project=project, **reward)
        return project

    @transaction.atomic
    def update(self, instance, validated_data):
        rewards = validated_data.pop("rewards", None)
        if "duration_days" in validated_data:
            # A new days_left restarts the countdown from now
            instance.end_date = timezone.now() + timedelta(days=validated_data["duration_days"])
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        if rewards is not None:
            self._sync_rewards(instance, rewards)
        return instance

    def _sync_rewards(self, project, rewards):
        existing = {reward.id: reward for reward in project.rewards.all()}
        keep = set()
        for data in rewards:
            reward_id = data.pop("id", None)
            reward = existing.get(reward_id)
            if reward is None:
                reward = Reward.objects.create(project=project, **data)
            else:
                for attr, value in data.items():
                    setattr(reward, attr, value)
                reward.save()
            keep.add(reward.id)
        project.rewards.exclude(id__in=keep).delete()

    def to_representation(self, instance):
        return ProjectDetailSerializer(instance, context=self.context).data

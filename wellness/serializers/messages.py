from rest_framework import serializers


class MessageSendSerializer(serializers.Serializer):
    subject = serializers.CharField(max_length=255, allow_blank=True)
    message = serializers.CharField(max_length=5000, allow_blank=True)
    toUserId = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class MessageReplySerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1)
    text = serializers.CharField(max_length=5000, allow_blank=True)


class MessageIdSerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1)


class MessageListQuerySerializer(serializers.Serializer):
    unread = serializers.BooleanField(required=False, default=False)
    page = serializers.IntegerField(min_value=1, required=False)
    pageSize = serializers.IntegerField(min_value=1, required=False)


class AnonymousReportSerializer(serializers.Serializer):
    subject = serializers.CharField(max_length=255, allow_blank=True)
    message = serializers.CharField(max_length=5000, allow_blank=True)

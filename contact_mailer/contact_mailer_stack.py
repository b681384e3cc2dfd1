from pathlib import Path

from aws_cdk import (
    Aws,
    Stack,
    aws_dynamodb as dynamodb,
    aws_lambda as _lambda,
    aws_lambda_event_sources as lambda_events,
    aws_iam as iam,
    Duration, CfnParameter
)
from constructs import Construct

NOTIFIER_CODE = str(Path(__file__).parent / "lambda" / "contact_notifier")

POWERTOOLS_LAYER_ARN = (
    "arn:aws:lambda:{region}:017000801446:layer:AWSLambdaPowertoolsPythonV3-python312-x86_64:7"
)


class ContactMailerStack(Stack):
    def __init__(self, scope: Construct, id: str, **kwargs):
        super().__init__(scope, id, **kwargs)

        mail_user_param = CfnParameter(self, "MailUser")
        mail_pass_param = CfnParameter(
            self, "MailPassParameter",
            default="/contact-mailer/mail-pass",
            allowed_pattern="^/.+",
            description="SSM SecureString parameter holding the mail account application password",
        )

        powertools_layer = _lambda.LayerVersion.from_layer_version_arn(
            self, "PowertoolsLayer", POWERTOOLS_LAYER_ARN.format(region=Aws.REGION)
        )

        # Contact form submissions written by the web forms; the streams carry every new document
        contact_messages_table = self.contact_table("ContactMessagesTable", "contact_messages")
        contacts_table = self.contact_table("ContactsTable", "contacts")

        # HTML notification to the team inbox, delivery failures are logged and dropped
        contact_messages_lambda = self.notifier_function(
            "ContactMessagesNotifierLambda", "contact_messages",
            mail_user_param, mail_pass_param, powertools_layer,
        )
        contact_messages_lambda.add_event_source(self.insert_events(contact_messages_table, retry_attempts=0))

        # Plain text notification to the admin inbox, delivery failures fail the invocation
        contacts_lambda = self.notifier_function(
            "ContactsNotifierLambda", "contacts",
            mail_user_param, mail_pass_param, powertools_layer,
        )
        contacts_lambda.add_event_source(self.insert_events(contacts_table, retry_attempts=2))

    def contact_table(self, construct_id, table_name):
        return dynamodb.Table(
            self, construct_id,
            table_name=table_name,
            partition_key=dynamodb.Attribute(name="id", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            stream=dynamodb.StreamViewType.NEW_IMAGE,
        )

    def notifier_function(self, construct_id, profile, mail_user_param, mail_pass_param, layer):
        function = _lambda.Function(
            self, construct_id,
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="contact_notifier.lambda_handler",
            code=_lambda.Code.from_asset(NOTIFIER_CODE),
            environment={
                "NOTIFIER_PROFILE": profile,
                "MAIL_USER": mail_user_param.value_as_string,
                "MAIL_PASS_PARAMETER": mail_pass_param.value_as_string,
                "POWERTOOLS_SERVICE_NAME": "contact-notifier",
            },
            layers=[layer],
            timeout=Duration.minutes(1),
            tracing=_lambda.Tracing.ACTIVE,
        )

        # Read the mail password from Parameter Store at cold start
        function.add_to_role_policy(iam.PolicyStatement(
            actions=["ssm:GetParameter"],
            resources=[
                f"arn:{Aws.PARTITION}:ssm:{Aws.REGION}:{Aws.ACCOUNT_ID}:parameter{mail_pass_param.value_as_string}"
            ]
        ))
        return function

    def insert_events(self, table, retry_attempts):
        return lambda_events.DynamoEventSource(
            table,
            starting_position=_lambda.StartingPosition.LATEST,
            batch_size=1,
            retry_attempts=retry_attempts,
            filters=[_lambda.FilterCriteria.filter({"eventName": _lambda.FilterRule.is_equal("INSERT")})],
        )

import pytest

from feature_generator.parser.base import ApiEndpoint, Parameter, RequestBody, ResponseDef
from feature_generator.templates import bloc, model, repository, screen, service, source, usecase
from feature_generator.templates.core import render_core_error
from feature_generator.templates.shared import (
    RenderContext,
    call_args,
    named_params,
    retrofit_params,
    typed_params,
)

USER_SCHEMA = {
    "type": "object",
    "required": ["id"],
    "properties": {"id": {"type": "integer"}, "name": {"type": "string"}},
}


@pytest.fixture
def ctx() -> RenderContext:
    return RenderContext(project_name="demo_app", feature_name="user_management")


@pytest.fixture
def get_user() -> ApiEndpoint:
    return ApiEndpoint(
        path="/users/{id}",
        method="get",
        parameters=(
            Parameter(name="id", location="path", required=True, type="int"),
            Parameter(name="expand", location="query", type="String"),
        ),
        responses={"200": ResponseDef(json_schema=USER_SCHEMA)},
    )


@pytest.fixture
def place_order() -> ApiEndpoint:
    return ApiEndpoint(
        path="/orders",
        method="post",
        operation_id="placeOrder",
        request_body=RequestBody(required=True, json_schema={"type": "object"}),
        responses={"201": ResponseDef(description="Created")},
    )


@pytest.fixture
def ping() -> ApiEndpoint:
    return ApiEndpoint(path="/ping", method="get")


class TestSignatures:
    def test_typed_params(self, get_user, place_order):
        assert typed_params(get_user) == "int id, String? expand"
        assert typed_params(place_order) == "PlaceOrderRequest params"

    def test_call_args(self, get_user, place_order, ping):
        assert call_args(get_user) == "id, expand"
        assert call_args(place_order) == "params"
        assert call_args(ping) == ""

    def test_retrofit_params(self, get_user, place_order):
        assert retrofit_params(get_user) == '@Path("id") int id, @Query("expand") String? expand'
        assert retrofit_params(place_order) == "@Body() PlaceOrderRequest params"

    def test_named_params(self, get_user, ping):
        assert named_params(get_user) == "{required int id, String? expand}"
        assert named_params(ping) == ""


class TestRenderContext:
    def test_names(self, ctx):
        assert ctx.pascal == "UserManagement"
        assert ctx.camel == "userManagement"

    def test_model_import_uses_folder(self):
        ctx = RenderContext(project_name="demo_app", feature_name="store", model_folder="models")
        assert ctx.model_import("PlaceOrderRequest") == (
            "package:demo_app/features/store/data/models/place_order_request.dart"
        )


class TestModelTemplate:
    def test_required_and_default_fields(self):
        schema = {
            "type": "object",
            "required": ["id"],
            "properties": {
                "id": {"type": "integer"},
                "price": {"type": "number"},
                "active": {"type": "boolean"},
                "tags": {"type": "array", "items": {"type": "string"}},
                "meta": {"type": "object"},
                "owner": {"$ref": "#/components/schemas/User"},
                "name": {"type": "string"},
            },
        }
        out = model.render_model("CreateItemsRequest", schema)
        assert "required int id," in out
        assert "@Default(0.0) double price," in out
        assert "@Default(false) bool active," in out
        assert "@Default([]) List<String> tags," in out
        assert "@Default({}) Map<String, dynamic> meta," in out
        assert "@Default({}) Map<String, dynamic> owner," in out
        assert '@Default("") String name,' in out

    def test_parts_and_from_json(self):
        out = model.render_model("GetUsersResponse", USER_SCHEMA, is_response=True)
        assert "part 'get_users_response.freezed.dart';" in out
        assert "part 'get_users_response.g.dart';" in out
        assert "class GetUsersResponse with _$GetUsersResponse" in out
        assert "_$GetUsersResponseFromJson(json)" in out

    def test_schema_without_properties_gets_envelope(self):
        out = model.render_model("GetOrdersResponse", {"type": "array"}, is_response=True)
        assert '@Default("") String message,' in out
        assert "@Default(null) dynamic data," in out

    def test_request_envelope_has_no_data(self):
        out = model.render_model("PlaceOrderRequest", None)
        assert "dynamic data" not in out

    def test_non_mapping_properties_get_envelope(self):
        out = model.render_model("PingRequest", {"type": "object", "properties": ["a", "b"]})
        assert '@Default("") String message,' in out

    def test_malformed_required_list_is_ignored(self):
        schema = {"properties": {"name": {"type": "string"}}, "required": [{"name": True}]}
        assert model.render_fields(schema) == ['    @Default("") String name,']

    def test_integer_default(self):
        assert model.default_value("int") == "0"


class TestServiceTemplate:
    def test_render_service(self, ctx, get_user, place_order):
        out = service.render_service(ctx, [get_user, place_order])
        assert "part 'user_management_service.g.dart';" in out
        assert "abstract class UserManagementRemoteService {" in out
        assert "factory UserManagementRemoteService(Dio dio) = _UserManagementRemoteService;" in out
        assert '@GET("/users/{id}")' in out
        assert "Future<GetUsersResponse> getUsers(" in out
        assert '@POST("/orders")' in out
        assert "Future<dynamic> placeOrder(@Body() PlaceOrderRequest params);" in out
        assert "import 'package:demo_app/features/user_management/data/model/get_users_response.dart';" in out

    def test_unknown_verb_annotated_as_get(self):
        ep = ApiEndpoint(path="/things", method="options")
        assert service.path_annotation(ep) == '@GET("/things")'

    def test_find_annotated_endpoints(self, ctx, get_user, place_order):
        out = service.render_service(ctx, [get_user, place_order])
        assert service.find_annotated_endpoints(out) == {
            ("get", "/users/{id}"),
            ("post", "/orders"),
        }


class TestSourceTemplates:
    def test_interface(self, ctx, get_user):
        out = source.render_source_interface(ctx, [get_user])
        assert "abstract class UserManagementRemoteDataSource {" in out
        assert "Future<GetUsersResponse> getUsers(int id, String? expand);" in out

    def test_interface_without_models_has_no_imports(self, ctx, ping):
        out = source.render_source_interface(ctx, [ping])
        assert not out.startswith("import")

    def test_implementation_delegates_with_argument_names(self, ctx, get_user):
        out = source.render_source_implementation(ctx, [get_user])
        assert "@Injectable(as: UserManagementRemoteDataSource)" in out
        assert "final UserManagementRemoteService userManagementService;" in out
        assert "userManagementService.getUsers(id, expand);" in out


class TestRepositoryTemplates:
    def test_interface(self, ctx, get_user):
        out = repository.render_repository_interface(ctx, [get_user])
        assert "import 'package:dartz/dartz.dart';" in out
        assert "import 'package:demo_app/core/error/error.dart';" in out
        assert "Future<Either<Error, GetUsersResponse>> getUsers(int id, String? expand);" in out

    def test_implementation_maps_errors(self, ctx, place_order):
        out = repository.render_repository_implementation(ctx, [place_order])
        assert "await remoteDataSource.placeOrder(params);" in out
        assert "return right(res);" in out
        assert "return left(Error.customErrorType(e.toString()));" in out


class TestUseCaseTemplate:
    def test_render_usecases(self, ctx, get_user, place_order):
        out = usecase.render_usecases(ctx, [get_user, place_order])
        assert "@injectable\nclass UserManagementUseCases {" in out
        assert "final UserManagementRepository repository;" in out
        assert "repository.getUsers(id, expand);" in out
        assert "repository.placeOrder(params);" in out


class TestBlocTemplates:
    def test_bloc(self, ctx, get_user, ping):
        out = bloc.render_bloc(ctx, [get_user, ping])
        assert "class UserManagementBloc extends Bloc<UserManagementEvent, UserManagementState> {" in out
        assert "getUsersRequested: (id, expand) => _getUsers(id, expand, emit)," in out
        assert "getPingRequested: () => _getPing(emit)," in out
        assert "Future<void> _getPing(Emitter<UserManagementState> emit) async {" in out
        assert "await _useCases.getUsers(id, expand);" in out
        assert "getUsersResponse: response," in out

    def test_event(self, ctx, get_user, ping):
        out = bloc.render_event(ctx, [get_user, ping])
        assert "part of 'user_management_bloc.dart';" in out
        assert (
            "const factory UserManagementEvent.getUsersRequested({required int id, String? expand}) "
            "= GetUsersRequested;"
        ) in out
        assert "const factory UserManagementEvent.getPingRequested() = GetPingRequested;" in out

    def test_state(self, ctx, get_user, ping):
        out = bloc.render_state(ctx, [get_user, ping])
        assert "@Default(false) bool isLoading," in out
        assert "@Default(Error.none()) Error error," in out
        assert "@Default(null) GetUsersResponse? getUsersResponse," in out
        assert "@Default(null) dynamic getPingResponse," in out

    def test_plain_event_with_fields(self, ctx, get_user):
        out = bloc.render_plain_event(ctx, get_user)
        assert "class GetUsersEvent extends UserManagementEvent {" in out
        assert "GetUsersEvent(this.id, this.expand);" in out
        assert "final int id;" in out

    def test_plain_event_without_fields(self, ctx, ping):
        assert bloc.render_plain_event(ctx, ping) == "class GetPingEvent extends UserManagementEvent {}"

    def test_plain_states(self, ctx, get_user):
        names = [name for name, _ in bloc.render_plain_states(ctx, get_user)]
        assert names == ["GetUsersLoadingState", "GetUsersSuccessState", "GetUsersErrorState"]

    def test_plain_handler(self, ctx, get_user):
        out = bloc.render_plain_handler(ctx, get_user)
        assert "_onGetUsersEvent(GetUsersEvent event, Emitter<UserManagementState> emit)" in out
        assert "_useCases.getUsers(event.id, event.expand);" in out
        assert bloc.render_plain_registration(ctx, get_user) == "    on<GetUsersEvent>(_onGetUsersEvent);"


class TestScreenTemplate:
    def test_render_screen(self, ctx):
        out = screen.render_screen(ctx)
        assert "class UserManagementScreen extends StatelessWidget {" in out
        assert "getIt<UserManagementBloc>()" in out
        assert "title: const Text('User Management')," in out
        assert "import 'package:demo_app/di/di_container.dart';" in out


class TestCoreError:
    def test_error_union(self):
        out = render_core_error()
        assert "class Error with _$Error {" in out
        assert "const factory Error.customErrorType(String message) = CustomErrorType;" in out
        assert "const factory Error.none() = NoError;" in out

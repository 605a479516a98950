import pytest

from feature_generator.errors import AnchorNotFound
from feature_generator.generator.patcher import (
    append_declarations,
    find_class_end,
    has_member,
    insert_after_last_match,
    insert_before_last_brace,
    insert_imports,
    insert_into_class,
    uses_factory_pattern,
)

SERVICE = """import 'package:dio/dio.dart';
import 'package:retrofit/retrofit.dart';

part 'store_service.g.dart';

abstract class StoreRemoteService {
  @GET("/pets")
  Future<dynamic> listPets();
}
"""

TWO_CLASSES = """class StoreUseCases {
  void a() {
    if (true) {
      print('x');
    }
  }
}

class Other {
  void b() {}
}
"""


class TestInsertImports:
    def test_inserted_after_last_import(self):
        out = insert_imports(SERVICE, ["package:demo/a.dart"])
        lines = out.splitlines()
        assert lines[2] == "import 'package:demo/a.dart';"
        assert lines[1] == "import 'package:retrofit/retrofit.dart';"

    def test_existing_import_skipped(self):
        out = insert_imports(SERVICE, ["package:dio/dio.dart"])
        assert out == SERVICE

    def test_duplicates_in_request_inserted_once(self):
        out = insert_imports(SERVICE, ["package:demo/a.dart", "package:demo/a.dart"])
        assert out.count("package:demo/a.dart") == 1

    def test_file_without_imports_gets_them_on_top(self):
        out = insert_imports("class A {}\n", ["package:demo/a.dart"])
        assert out.startswith("import 'package:demo/a.dart';\n")
        assert out.endswith("class A {}\n")


class TestInsertBeforeLastBrace:
    def test_member_lands_inside_class(self):
        member = '  @POST("/orders")\n  Future<dynamic> placeOrder();'
        out = insert_before_last_brace(SERVICE, [member])
        assert out.index("placeOrder") < out.rindex("}")
        assert out.index("listPets") < out.index("placeOrder")

    def test_missing_brace_raises(self):
        with pytest.raises(AnchorNotFound):
            insert_before_last_brace("no braces here", ["x"])


class TestInsertIntoClass:
    def test_find_class_end_skips_nested_braces(self):
        end = find_class_end(TWO_CLASSES, "StoreUseCases")
        assert TWO_CLASSES[end] == "}"
        assert TWO_CLASSES[end + 1:].lstrip().startswith("class Other")

    def test_member_inserted_into_named_class_only(self):
        out = insert_into_class(TWO_CLASSES, "StoreUseCases", ["  void c() {}"])
        assert out.index("void c()") < out.index("class Other")

    def test_unknown_class_raises(self):
        with pytest.raises(AnchorNotFound):
            insert_into_class(TWO_CLASSES, "Missing", ["  void c() {}"])

    def test_class_name_prefix_does_not_match(self):
        with pytest.raises(AnchorNotFound):
            find_class_end("class StoreUseCasesImpl {}", "StoreUseCases")


class TestInsertAfterLastMatch:
    def test_after_last_variant(self):
        content = (
            "class E with _$E {\n"
            "  const factory E.a() = A;\n\n"
            "  const factory E.b() = B;\n"
            "}\n"
        )
        out = insert_after_last_match(content, r"const factory[^;]*;", "\n\n  const factory E.c() = C;")
        assert out.index("E.b()") < out.index("E.c()") < out.rindex("}")

    def test_no_match_raises(self):
        with pytest.raises(AnchorNotFound):
            insert_after_last_match("class A {}", r"const factory", "x")


class TestAppendDeclarations:
    def test_declarations_follow_final_brace(self):
        content = "abstract class StoreEvent {}\n\nclass AEvent extends StoreEvent {}\n"
        out = append_declarations(content, ["class BEvent extends StoreEvent {}"])
        assert out.rstrip().endswith("class BEvent extends StoreEvent {}")
        assert "class AEvent extends StoreEvent {}\n\nclass BEvent" in out


class TestDetection:
    def test_factory_pattern(self):
        assert uses_factory_pattern("@freezed\nclass E {\n  const factory E.a() = A;\n}")
        assert not uses_factory_pattern("abstract class E {}\nclass A extends E {}")

    def test_has_member(self):
        assert has_member(SERVICE, "listPets")
        assert not has_member(SERVICE, "listPet")
        assert has_member("    @Default(null) dynamic getUsersResponse,", "getUsersResponse")
        assert has_member("  getUsersRequested: () => x,", "getUsersRequested")

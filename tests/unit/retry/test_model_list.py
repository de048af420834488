"""Unit tests for ModelList resolution."""

import pytest

from completion_layer.llm.exceptions import ConfigurationError
from completion_layer.retry.model_list import ModelList, parse_model_list


class TestParseModelList:
    """Test comma-separated parsing."""
    
    def test_trims_and_drops_empty_entries(self):
        assert parse_model_list(" model1 , ,model2,, ") == ["model1", "model2"]
    
    def test_empty_string(self):
        assert parse_model_list("") == []


class TestModelList:
    """Test ModelList construction and resolution."""
    
    def setup_method(self):
        self.model_list = ModelList.from_string("model1,model2,model3")
    
    def test_defaults_when_nothing_given(self):
        assert self.model_list.resolve() == ["model1", "model2", "model3"]
    
    def test_primary_first_then_fallbacks(self):
        assert self.model_list.resolve("primary", ["fb1", "fb2"]) == ["primary", "fb1", "fb2"]
    
    def test_primary_alone_replaces_defaults(self):
        assert self.model_list.resolve("primary") == ["primary"]
    
    def test_fallbacks_without_primary(self):
        assert self.model_list.resolve(None, ["fb1", "fb2"]) == ["fb1", "fb2"]
    
    def test_empty_explicit_values_use_defaults(self):
        assert self.model_list.resolve("", []) == ["model1", "model2", "model3"]
    
    def test_deduplicates_preserving_order(self):
        assert self.model_list.resolve("a", ["b", "a", "c", "b"]) == ["a", "b", "c"]
    
    def test_defaults_are_deduplicated(self):
        assert ModelList.from_string("m1,m2,m1").default_models == ["m1", "m2"]
    
    def test_default_list_is_not_mutable_through_resolve(self):
        models = self.model_list.resolve()
        models.append("rogue")
        
        assert self.model_list.resolve() == ["model1", "model2", "model3"]
    
    @pytest.mark.parametrize("raw", ["", "   ", ",,", " , "])
    def test_empty_default_list_fails_at_construction(self, raw):
        with pytest.raises(ConfigurationError, match="at least one model"):
            ModelList.from_string(raw)
